"""Validation of new account details."""

import logging

from werkzeug.datastructures import MultiDict
from wtforms import Form, PasswordField, StringField
from wtforms.validators import Email, InputRequired, Regexp

from .exceptions import ValidationFailed

logger = logging.getLogger(__name__)

PASSWORD_PATTERN = r'^[a-zA-Z0-9]{6,30}\Z'
"""Passwords are alphanumeric, between 6 and 30 characters long."""


class RegistrationForm(Form):
    """Details required to create an account."""

    email = StringField('E-mail address',
                        validators=[InputRequired(), Email()])
    password = PasswordField(
        'Password',
        validators=[
            InputRequired(),
            Regexp(PASSWORD_PATTERN,
                   message='Password must be 6-30 letters or digits')
        ]
    )


def validate_registration(email: str, password: str) -> None:
    """
    Check an e-mail address and password against the account policy.

    Parameters
    ----------
    email : str
    password : str

    Raises
    ------
    :class:`.ValidationFailed`
        Raised if either value is not acceptable. The ``errors`` attribute
        maps field names to lists of messages.

    """
    form = RegistrationForm(MultiDict({'email': email or '',
                                       'password': password or ''}))
    if not form.validate():
        logger.debug('Registration details not valid: %s',
                     sorted(form.errors))
        raise ValidationFailed('Invalid registration details',
                               {k: list(v) for k, v in form.errors.items()})
