"""
The account lifecycle.

An account is created *unconfirmed*, becomes *confirmed* when the token sent
to its e-mail address is redeemed, and is *deleted* by its authenticated
owner. Independently, a client is either anonymous or holds a session bound
to one account.

:class:`AccountLifecycle` orchestrates these transitions. It owns no data:
account records, confirmation tokens and sessions belong to the stores that
are passed to it, and each store is responsible for its own consistency
(a unique index on e-mail address, atomic get-and-delete of tokens).
"""

from typing import Optional, Protocol, Tuple
import logging

from . import domain
from .exceptions import DuplicateAccount, InvalidCredentials, \
    EmailNotConfirmed, Unauthorized, NotFound, DeliveryFailed
from .validation import validate_registration

logger = logging.getLogger(__name__)


class AccountStorePort(Protocol):
    """Persists account records."""

    def get_by_email(self, email: str) -> Optional[domain.Account]: ...

    def get_by_id(self, account_id: str) -> Optional[domain.Account]: ...

    def add(self, account: domain.Account) -> domain.Account: ...

    def set_confirmed(self, account_id: str) -> bool: ...

    def delete(self, account_id: str) -> bool: ...


class TokenStorePort(Protocol):
    """Issues and redeems confirmation tokens."""

    def issue(self, account_id: str) -> domain.ConfirmationToken: ...

    def consume(self, token: str) -> Optional[str]: ...


class SessionStorePort(Protocol):
    """Binds session IDs to authenticated accounts."""

    def create(self, account_id: str) -> domain.Session: ...

    def get(self, session_id: Optional[str]) -> Optional[str]: ...

    def destroy(self, session_id: str) -> None: ...


class HasherPort(Protocol):
    """One-way password hashing."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...

    def verify_dummy(self, password: str) -> bool: ...


class MailerPort(Protocol):
    """Delivers confirmation tokens out of band."""

    def send_confirmation(self, email: str, token: str) -> None: ...


class AccountLifecycle(object):
    """Creates, confirms, authenticates and deletes accounts."""

    def __init__(self, accounts: AccountStorePort, tokens: TokenStorePort,
                 sessions: SessionStorePort, hasher: HasherPort,
                 mailer: Optional[MailerPort] = None) -> None:
        self.accounts = accounts
        self.tokens = tokens
        self.sessions = sessions
        self.hasher = hasher
        self.mailer = mailer

    def create(self, email: str, password: str) -> bool:
        """
        Create a new, unconfirmed account.

        The duplicate check runs before validation, and both run before any
        hashing or storage, so a client that reuses an address always sees
        :class:`.DuplicateAccount` first.

        Parameters
        ----------
        email : str
        password : str

        Returns
        -------
        bool
            Always ``True``; failures are raised.

        Raises
        ------
        :class:`.DuplicateAccount`
        :class:`.ValidationFailed`

        """
        if self.accounts.get_by_email(email) is not None:
            logger.debug('Rejected registration for an existing address')
            raise DuplicateAccount('A user with that email already exists.')

        validate_registration(email, password)

        account = self.accounts.add(domain.Account(
            email=email,
            password_hash=self.hasher.hash(password),
            confirmed=False
        ))
        logger.info('Created account %s', account.account_id)
        self._send_confirmation(account)
        return True

    def confirm(self, token: str) -> bool:
        """
        Redeem a confirmation token.

        Returns ``False`` if the token does not exist, has expired, or has
        already been redeemed, or if its account has since been deleted.
        """
        account_id = self.tokens.consume(token)
        if account_id is None:
            logger.debug('No such confirmation token')
            return False
        if not self.accounts.set_confirmed(account_id):
            logger.debug('Token redeemed for missing account %s', account_id)
            return False
        logger.info('Confirmed account %s', account_id)
        return True

    def resend_confirmation(self, email: str) -> bool:
        """
        Issue and deliver a fresh confirmation token.

        This recovers an account whose first token was lost or expired. The
        result does not depend on whether the address has an account.
        """
        account = self.accounts.get_by_email(email)
        if account is None or account.confirmed:
            logger.debug('No unconfirmed account; not resending')
            return True
        self._send_confirmation(account)
        return True

    def login(self, email: str, password: str) \
            -> Tuple[domain.Account, domain.Session]:
        """
        Authenticate with an e-mail address and password.

        Returns
        -------
        :class:`.domain.Account`
        :class:`.domain.Session`
            A new session bound to the account.

        Raises
        ------
        :class:`.InvalidCredentials`
            Raised if there is no such account or the password is wrong. The
            two cases cannot be told apart.
        :class:`.EmailNotConfirmed`
            Raised if the credentials are correct but the account has not
            been confirmed.

        """
        account = self.accounts.get_by_email(email)
        if account is None:
            self.hasher.verify_dummy(password)
            raise InvalidCredentials('Email or password invalid.')
        if not self.hasher.verify(password, account.password_hash):
            raise InvalidCredentials('Email or password invalid.')
        if not account.confirmed:
            raise EmailNotConfirmed('Please confirm your email.')

        session = self.sessions.create(account.account_id)
        logger.info('Account %s logged in', account.account_id)
        return account, session

    def logout(self, session_id: Optional[str]) -> bool:
        """
        End a session.

        Logging out without a session is harmless. Failure to destroy the
        session propagates to the caller.
        """
        if session_id:
            self.sessions.destroy(session_id)
        return True

    def delete(self, session_id: Optional[str]) -> bool:
        """
        Delete the account of the current session, and end the session.

        Raises
        ------
        :class:`.Unauthorized`
            Raised if there is no active session.

        """
        account_id = self._require_session(session_id)
        self.accounts.delete(account_id)
        logger.info('Deleted account %s', account_id)
        self.sessions.destroy(session_id)    # type: ignore
        return True

    def current_user(self, session_id: Optional[str]) -> domain.Account:
        """
        Get the account of the current session.

        Raises
        ------
        :class:`.Unauthorized`
            Raised if there is no active session.
        :class:`.NotFound`
            Raised if the account no longer exists.

        """
        account_id = self._require_session(session_id)
        account = self.accounts.get_by_id(account_id)
        if account is None:
            raise NotFound(f'No such account: {account_id}')
        return account

    def _require_session(self, session_id: Optional[str]) -> str:
        account_id = self.sessions.get(session_id)
        if account_id is None:
            raise Unauthorized('user not logged in')
        return account_id

    def _send_confirmation(self, account: domain.Account) -> None:
        token = self.tokens.issue(account.account_id)    # type: ignore
        if self.mailer is None:
            return
        try:
            self.mailer.send_confirmation(account.email, token.token)
        except DeliveryFailed as e:
            # The account stands; a new token can be requested.
            logger.error('Could not deliver confirmation for %s: %s',
                         account.account_id, e)
