"""Tests for :mod:`useraccounts.validation`."""

import string
from unittest import TestCase

from hypothesis import given
from hypothesis import strategies as st

from useraccounts.exceptions import ValidationFailed
from useraccounts.validation import validate_registration

ALPHANUMERIC = string.ascii_letters + string.digits


class TestValidateRegistration(TestCase):
    """Check e-mail format and password policy."""

    def test_valid(self):
        """A well-formed address and an alphanumeric password are fine."""
        self.assertIsNone(validate_registration('a@b.com', 'secret1'))

    def test_bad_email(self):
        """A malformed address is rejected."""
        with self.assertRaises(ValidationFailed) as ctx:
            validate_registration('not-an-email', 'secret1')
        self.assertIn('email', ctx.exception.errors)
        self.assertNotIn('password', ctx.exception.errors)

    def test_email_needs_a_domain_with_a_dot(self):
        """The domain part must have at least two segments."""
        with self.assertRaises(ValidationFailed) as ctx:
            validate_registration('user@localhost', 'secret1')
        self.assertIn('email', ctx.exception.errors)

    def test_missing_values(self):
        """Both fields are required."""
        with self.assertRaises(ValidationFailed) as ctx:
            validate_registration('', '')
        self.assertIn('email', ctx.exception.errors)
        self.assertIn('password', ctx.exception.errors)

    def test_password_too_short(self):
        """Passwords have at least six characters."""
        with self.assertRaises(ValidationFailed) as ctx:
            validate_registration('a@b.com', 'abc12')
        self.assertIn('password', ctx.exception.errors)

    def test_password_too_long(self):
        """Passwords have at most thirty characters."""
        with self.assertRaises(ValidationFailed):
            validate_registration('a@b.com', 'a' * 31)

    def test_password_with_trailing_newline(self):
        """A trailing newline is not let through by the pattern."""
        with self.assertRaises(ValidationFailed):
            validate_registration('a@b.com', 'secret1\n')

    @given(st.text(alphabet=ALPHANUMERIC, min_size=6, max_size=30))
    def test_alphanumeric_passwords_accepted(self, password):
        """Any alphanumeric password of 6-30 characters is accepted."""
        validate_registration('a@b.com', password)

    @given(st.text(min_size=6, max_size=30).filter(
        lambda s: any(c not in ALPHANUMERIC for c in s)))
    def test_other_characters_rejected(self, password):
        """Anything but ASCII letters and digits is rejected."""
        with self.assertRaises(ValidationFailed):
            validate_registration('a@b.com', password)
