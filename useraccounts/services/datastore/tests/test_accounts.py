"""Tests for :mod:`useraccounts.services.datastore`."""

import shutil
import tempfile
from unittest import TestCase

from useraccounts import domain
from useraccounts.exceptions import DuplicateAccount
from useraccounts.services import datastore
from useraccounts.services.datastore import util, models


class SetUpStoreMixin(object):
    """Mixin for creating a temporary account database."""

    def setUp(self):
        """Set up the database."""
        self.db_path = tempfile.mkdtemp()
        self.engine = util.new_engine(f'sqlite:///{self.db_path}/test.db')
        datastore.create_all(self.engine)
        self.factory = util.new_session_factory(self.engine)
        self.store = datastore.AccountStore(self.factory)

    def tearDown(self):
        """Drop the database."""
        datastore.drop_all(self.engine)
        self.engine.dispose()
        shutil.rmtree(self.db_path)


class TestAdd(SetUpStoreMixin, TestCase):
    """Tests for :meth:`.AccountStore.add`."""

    def test_add(self):
        """The store assigns an ID to a new account."""
        account = self.store.add(domain.Account(email='a@b.com',
                                                password_hash='foohash'))
        self.assertIsNotNone(account.account_id)
        self.assertEqual(account.email, 'a@b.com')
        self.assertFalse(account.confirmed)
        self.assertIsNotNone(account.created)

        with util.transaction(self.factory) as session:
            db_account = session.get(models.DBAccount, account.account_id)
            self.assertEqual(db_account.password_hash, 'foohash')

    def test_add_duplicate(self):
        """The unique index rejects a second account with the same email."""
        self.store.add(domain.Account(email='a@b.com', password_hash='foo'))
        with self.assertRaises(DuplicateAccount):
            self.store.add(domain.Account(email='a@b.com',
                                          password_hash='bar'))


class TestLookup(SetUpStoreMixin, TestCase):
    """Tests for lookups by e-mail and by ID."""

    def setUp(self):
        """Add an account to find."""
        super(TestLookup, self).setUp()
        self.account = self.store.add(domain.Account(email='a@b.com',
                                                     password_hash='foo'))

    def test_get_by_email(self):
        """An account can be found by its e-mail address."""
        found = self.store.get_by_email('a@b.com')
        self.assertEqual(found.account_id, self.account.account_id)
        self.assertEqual(found.password_hash, 'foo')

    def test_get_by_email_missing(self):
        """There is no account for an unknown address."""
        self.assertIsNone(self.store.get_by_email('c@d.com'))

    def test_get_by_id(self):
        """An account can be found by its ID."""
        found = self.store.get_by_id(self.account.account_id)
        self.assertEqual(found.email, 'a@b.com')

    def test_get_by_id_missing(self):
        """There is no account for an unknown ID."""
        self.assertIsNone(self.store.get_by_id('nope'))


class TestUpdateAndDelete(SetUpStoreMixin, TestCase):
    """Tests for confirming and deleting accounts."""

    def setUp(self):
        """Add an account to change."""
        super(TestUpdateAndDelete, self).setUp()
        self.account = self.store.add(domain.Account(email='a@b.com',
                                                     password_hash='foo'))

    def test_set_confirmed(self):
        """An account can be confirmed."""
        self.assertTrue(self.store.set_confirmed(self.account.account_id))
        self.assertTrue(
            self.store.get_by_id(self.account.account_id).confirmed
        )

    def test_set_confirmed_missing(self):
        """Confirming a missing account changes nothing."""
        self.assertFalse(self.store.set_confirmed('nope'))

    def test_delete(self):
        """A deleted account cannot be found."""
        self.assertTrue(self.store.delete(self.account.account_id))
        self.assertIsNone(self.store.get_by_id(self.account.account_id))
        self.assertIsNone(self.store.get_by_email('a@b.com'))

    def test_delete_missing(self):
        """Deleting a missing account changes nothing."""
        self.assertFalse(self.store.delete('nope'))

    def test_email_reusable_after_delete(self):
        """Once deleted, the e-mail address is free again."""
        self.store.delete(self.account.account_id)
        account = self.store.add(domain.Account(email='a@b.com',
                                                password_hash='bar'))
        self.assertNotEqual(account.account_id, self.account.account_id)


class TestAvailability(SetUpStoreMixin, TestCase):
    """Tests for :meth:`.AccountStore.is_available`."""

    def test_available(self):
        """The database answers."""
        self.assertTrue(self.store.is_available())
