"""Defines account, token and session concepts for the accounts service."""

from typing import Any, Optional, Type, NamedTuple
from datetime import datetime

import dateutil.parser
from pytz import UTC


class Account(NamedTuple):
    """Represents a user account."""

    email: str
    """The user's e-mail address. Unique across all accounts."""

    password_hash: str = ''
    """Salted one-way hash of the user's password. Never the plaintext."""

    account_id: Optional[str] = None
    """
    Unique identifier assigned by the account store.

    If ``None``, the account does not exist yet.
    """

    confirmed: bool = False
    """Whether or not the user has confirmed their e-mail address."""

    created: Optional[datetime] = None
    """When the account was created."""

    def public(self) -> dict:
        """Get the parts of the account that may be shown to its owner."""
        return {
            'account_id': self.account_id,
            'email': self.email,
            'confirmed': self.confirmed
        }


class ConfirmationToken(NamedTuple):
    """A one-time token that confirms the e-mail address of an account."""

    token: str
    """Opaque value delivered to the user out of band."""

    account_id: str
    """The account that is confirmed when the token is redeemed."""

    created: datetime
    """When the token was issued."""

    expires: datetime
    """After this time, the token is treated as though it never existed."""

    @property
    def expired(self) -> bool:
        """Expired if the current time is later than :attr:`.expires`."""
        return datetime.now(tz=UTC) >= self.expires


class Session(NamedTuple):
    """Represents an authenticated session."""

    session_id: str
    """Unique identifier for the session."""

    account_id: str
    """The account for which the session was created."""

    start_time: datetime
    """The datetime when the session was created."""

    end_time: Optional[datetime] = None
    """The datetime when the session ends."""

    nonce: Optional[str] = None
    """A pseudo-random nonce generated when the session was created."""

    @property
    def expired(self) -> bool:
        """Expired if the current time is later than :attr:`.end_time`."""
        return bool(self.end_time is not None
                    and datetime.now(tz=UTC) >= self.end_time)

    @property
    def expires(self) -> Optional[int]:
        """
        Number of seconds until the session expires.

        If the session is already expired, returns 0.
        """
        if self.end_time is None:
            return None
        duration = (self.end_time - datetime.now(tz=UTC)).total_seconds()
        return max(int(duration), 0)


def to_dict(obj: tuple) -> dict:
    """
    Generate a JSON-friendly dict from a NamedTuple instance.

    Datetimes are rendered as ISO-8601 strings.

    Parameters
    ----------
    obj : tuple
        A NamedTuple instance.

    Returns
    -------
    dict

    """
    if not hasattr(obj, '_asdict'):  # NamedTuple-generated classes have this.
        return {}
    data = {}
    for field, value in obj._asdict().items():
        if isinstance(value, datetime):
            value = value.isoformat()
        data[field] = value
    return data


def from_dict(cls: Type[tuple], data: dict) -> Any:
    """
    Generate a NamedTuple instance from a dict produced by :func:`to_dict`.

    Keys that are not fields of ``cls`` are ignored. String values for
    fields annotated as datetimes are parsed.
    """
    hints = getattr(cls, '__annotations__', {})
    _data = {}
    for field in cls._fields:   # type: ignore
        if field not in data:
            continue
        value = data[field]
        if isinstance(value, str) and _expects_datetime(hints.get(field)):
            value = dateutil.parser.parse(value)
        _data[field] = value
    return cls(**_data)


def _expects_datetime(field_type: Any) -> bool:
    if field_type is datetime:
        return True
    return datetime in getattr(field_type, '__args__', ())
