"""
Database integration for persisting account records.

E-mail addresses are unique: this is checked by the lifecycle before an
account is created, and enforced by a unique index on the ``accounts``
table for requests that race past that check.
"""

from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from ... import domain
from ...exceptions import DuplicateAccount
from . import util
from .models import DBAccount

logger = logging.getLogger(__name__)

create_all = util.create_all
drop_all = util.drop_all


class AccountStore(object):
    """Persists :class:`.domain.Account` records."""

    def __init__(self, factory: sessionmaker) -> None:
        self._factory = factory

    def get_by_email(self, email: str) -> Optional[domain.Account]:
        """Load the account with an e-mail address, if there is one."""
        with util.transaction(self._factory) as session:
            db_account = session.query(DBAccount) \
                .filter(DBAccount.email == email) \
                .first()
            if db_account is None:
                return None
            return db_account.to_domain()

    def get_by_id(self, account_id: str) -> Optional[domain.Account]:
        """Load an account by ID, if it exists."""
        with util.transaction(self._factory) as session:
            db_account = session.get(DBAccount, account_id)
            if db_account is None:
                return None
            return db_account.to_domain()

    def add(self, account: domain.Account) -> domain.Account:
        """
        Persist a new :class:`.domain.Account`.

        Parameters
        ----------
        account : :class:`.domain.Account`
            The account to create. ``account_id`` is ignored; the store
            assigns one.

        Returns
        -------
        :class:`.domain.Account`
            The account as stored, including its new ``account_id``.

        Raises
        ------
        :class:`.DuplicateAccount`
            Raised if an account with the same e-mail address exists.

        """
        try:
            with util.transaction(self._factory) as session:
                db_account = DBAccount(
                    email=account.email,
                    password_hash=account.password_hash,
                    confirmed=account.confirmed
                )
                session.add(db_account)
                session.flush()
                stored = db_account.to_domain()
        except IntegrityError as e:
            logger.debug('Unique constraint failed on insert: %s', e)
            raise DuplicateAccount('An account with that email exists') from e
        logger.debug('Created account %s', stored.account_id)
        return stored

    def set_confirmed(self, account_id: str) -> bool:
        """
        Mark an account as confirmed.

        Returns ``False`` if the account does not exist.
        """
        with util.transaction(self._factory) as session:
            updated = session.query(DBAccount) \
                .filter(DBAccount.account_id == account_id) \
                .update({DBAccount.confirmed: True},
                        synchronize_session=False)
        return bool(updated)

    def delete(self, account_id: str) -> bool:
        """
        Delete an account.

        Returns ``False`` if the account does not exist.
        """
        with util.transaction(self._factory) as session:
            deleted = session.query(DBAccount) \
                .filter(DBAccount.account_id == account_id) \
                .delete(synchronize_session=False)
        return bool(deleted)

    def is_available(self) -> bool:
        """Check our connection to the database."""
        return util.is_available(self._factory)
