"""Tests for :mod:`useraccounts.domain`."""

from unittest import TestCase
from datetime import datetime, timedelta
from pytz import UTC

from useraccounts import domain


class TestDictCoercion(TestCase):
    """Tests for :func:`domain.from_dict` and :func:`domain.to_dict`."""

    def test_session(self):
        """A session survives a trip through a dict."""
        now = datetime.now(tz=UTC)
        session = domain.Session(
            session_id='foo-session',
            account_id='abc123',
            start_time=now,
            end_time=now + timedelta(seconds=500),
            nonce='0039299290098'
        )
        data = domain.to_dict(session)
        self.assertIsInstance(data['start_time'], str)
        self.assertEqual(session,
                         domain.from_dict(domain.Session, data))

    def test_optional_datetime_is_none(self):
        """An optional datetime field may be ``None``."""
        session = domain.Session(session_id='foo', account_id='bar',
                                 start_time=datetime.now(tz=UTC))
        data = domain.to_dict(session)
        self.assertIsNone(data['end_time'])
        self.assertIsNone(domain.from_dict(domain.Session, data).end_time)

    def test_extra_keys_are_ignored(self):
        """Keys that are not fields are dropped."""
        account = domain.from_dict(domain.Account,
                                   {'email': 'a@b.com', 'foo': 'bar'})
        self.assertEqual(account.email, 'a@b.com')

    def test_not_a_namedtuple(self):
        """Anything without ``_asdict`` becomes an empty dict."""
        self.assertEqual(domain.to_dict(('foo', 'bar')), {})


class TestAccount(TestCase):
    """Tests for :class:`domain.Account`."""

    def test_public(self):
        """The public view of an account never includes the hash."""
        account = domain.Account(email='a@b.com', password_hash='$2b$foo',
                                 account_id='abc', confirmed=True)
        self.assertEqual(account.public(), {'account_id': 'abc',
                                            'email': 'a@b.com',
                                            'confirmed': True})

    def test_defaults_to_unconfirmed(self):
        """New accounts are not confirmed."""
        self.assertFalse(domain.Account(email='a@b.com').confirmed)


class TestSessionExpiry(TestCase):
    """Expiry properties of :class:`domain.Session`."""

    def test_expired(self):
        """A session that ended in the past is expired."""
        now = datetime.now(tz=UTC)
        session = domain.Session(session_id='foo', account_id='bar',
                                 start_time=now - timedelta(seconds=10),
                                 end_time=now - timedelta(seconds=5))
        self.assertTrue(session.expired)
        self.assertEqual(session.expires, 0)

    def test_not_expired(self):
        """A session that ends in the future is not expired."""
        now = datetime.now(tz=UTC)
        session = domain.Session(session_id='foo', account_id='bar',
                                 start_time=now,
                                 end_time=now + timedelta(seconds=500))
        self.assertFalse(session.expired)
        self.assertGreater(session.expires, 490)

    def test_open_ended(self):
        """A session with no end time never expires."""
        session = domain.Session(session_id='foo', account_id='bar',
                                 start_time=datetime.now(tz=UTC))
        self.assertFalse(session.expired)
        self.assertIsNone(session.expires)


class TestConfirmationToken(TestCase):
    """Tests for :class:`domain.ConfirmationToken`."""

    def test_expired(self):
        """A token past its expiry is expired."""
        now = datetime.now(tz=UTC)
        token = domain.ConfirmationToken(token='foo', account_id='bar',
                                         created=now - timedelta(days=2),
                                         expires=now - timedelta(days=1))
        self.assertTrue(token.expired)
