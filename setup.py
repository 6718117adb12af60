"""Install the user accounts service."""

from setuptools import setup, find_packages

setup(
    name='user-accounts',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    install_requires=[
        "flask",
        "werkzeug",
        "sqlalchemy",
        "redis",
        "fakeredis",
        "pyjwt",
        "python-dateutil",
        "pytz",
        "wtforms",
        "email-validator",
        "bcrypt",
        "retry",
        "python-json-logger",
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis",
            "mimesis",
        ]
    },
    zip_safe=False
)
