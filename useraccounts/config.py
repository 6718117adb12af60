"""Flask configuration."""

import os
import secrets

#################### General config for app ####################
PORT = int(os.environ.get('PORT', '4000'))
"""Port on which the development server listens."""

LOGLEVEL = int(os.environ.get('LOGLEVEL', '20'))

SECRET_KEY = os.environ.get('SECRET_KEY', secrets.token_urlsafe(16))
"""Sets the `Flask` secret key. Not used for account sessions."""

#################### Account database ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///accounts.db')

CREATE_DB = bool(int(os.environ.get('CREATE_DB', '0')))
"""Create the account tables when the application starts."""

#################### Key-value store ####################
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')
REDIS_DATABASE = os.environ.get('REDIS_DATABASE', '0')
REDIS_CLUSTER = os.environ.get('REDIS_CLUSTER', '0')

REDIS_FAKE = os.environ.get('REDIS_FAKE', '0')
"""Use the FakeRedis library instead of a redis service.

Useful for testing and development."""

#################### Sessions ####################
JWT_SECRET = os.environ.get('JWT_SECRET', secrets.token_urlsafe(16))
"""Signs session cookies and the session data held in Redis."""

SESSION_DURATION = os.environ.get('SESSION_DURATION',
                                  str(60 * 60 * 24 * 365))
"""Lifetime of a session, in seconds."""

SESSION_COOKIE_NAME = os.environ.get('SESSION_COOKIE_NAME', 'qid')
SESSION_COOKIE_SECURE = bool(int(os.environ.get('SESSION_COOKIE_SECURE',
                                                '1')))
SESSION_COOKIE_DOMAIN = os.environ.get('SESSION_COOKIE_DOMAIN', None)

#################### Confirmation ####################
CONFIRMATION_TOKEN_DURATION = os.environ.get('CONFIRMATION_TOKEN_DURATION',
                                             '86400')
"""Lifetime of a confirmation token, in seconds."""

CONFIRMATION_URL = os.environ.get(
    'CONFIRMATION_URL',
    'http://localhost:4000/confirm?token={token}'
)
"""Link sent to new users. ``{token}`` is replaced with the token."""

BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', '10'))

#################### Mail ####################
MAIL_ENABLED = bool(int(os.environ.get('MAIL_ENABLED', '0')))
"""If disabled, confirmation links are logged instead of sent."""

MAIL_HOST = os.environ.get('MAIL_HOST', 'localhost')
MAIL_PORT = int(os.environ.get('MAIL_PORT', '25'))
MAIL_SENDER = os.environ.get('MAIL_SENDER', 'noreply@localhost')
