"""Password hashing and verification."""

from typing import Optional
import logging

import bcrypt

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72
"""bcrypt only considers this many bytes of the password."""


class PasswordHasher(object):
    """
    Salted one-way password hashing with bcrypt.

    The salt and cost factor are embedded in the hash itself, so a hash
    produced with one value of ``rounds`` can still be verified after the
    cost factor is changed.
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        self._dummy: Optional[bytes] = None

    def hash(self, password: str) -> str:
        """Generate a secure hash of a password."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed: bytes = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('ascii')

    def verify(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash."""
        encoded = password.encode('utf-8')
        if len(encoded) > MAX_PASSWORD_BYTES:
            # Never produced by the password policy, so it cannot match.
            return False
        return bool(bcrypt.checkpw(encoded, hashed.encode('ascii')))

    def verify_dummy(self, password: str) -> bool:
        """
        Spend the same effort as :meth:`.verify`, against no account.

        Used when no account matches the login e-mail address, so that an
        unknown address and a wrong password take about as long to reject.
        Always returns ``False``.
        """
        if self._dummy is None:
            self._dummy = self.hash('dummy-password').encode('ascii')
        encoded = password.encode('utf-8')[:MAX_PASSWORD_BYTES]
        bcrypt.checkpw(encoded, self._dummy)
        return False
