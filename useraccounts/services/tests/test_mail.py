"""Tests for :mod:`useraccounts.services.mail`."""

import smtplib
from unittest import TestCase, mock

from useraccounts.exceptions import DeliveryFailed
from useraccounts.services import mail


class TestMailSession(TestCase):
    """Confirmation tokens are sent by SMTP."""

    def setUp(self):
        """Configure a session without connecting."""
        self.session = mail.MailSession(
            host='mail.example.org', port=2525, sender='noreply@example.org',
            confirmation_url='https://example.org/confirm?token={token}'
        )

    def test_compose(self):
        """The message carries the confirmation link."""
        message = self.session.compose('a@b.com', 'thetoken')
        self.assertEqual(message['To'], 'a@b.com')
        self.assertEqual(message['From'], 'noreply@example.org')
        self.assertIn('https://example.org/confirm?token=thetoken',
                      message.get_content())

    @mock.patch(f'{mail.__name__}.smtplib.SMTP')
    def test_send_confirmation(self, mock_smtp):
        """The message is handed to the SMTP service."""
        conn = mock_smtp.return_value.__enter__.return_value
        self.session.send_confirmation('a@b.com', 'thetoken')
        mock_smtp.assert_called_once_with(host='mail.example.org', port=2525,
                                          timeout=10.0)
        self.assertEqual(conn.send_message.call_count, 1)

    @mock.patch(f'{mail.__name__}.smtplib.SMTP')
    def test_send_fails(self, mock_smtp):
        """:class:`.DeliveryFailed` is raised if the SMTP service refuses."""
        conn = mock_smtp.return_value.__enter__.return_value
        conn.send_message.side_effect = \
            smtplib.SMTPRecipientsRefused({'a@b.com': (550, b'no')})
        with self.assertRaises(DeliveryFailed):
            self.session.send_confirmation('a@b.com', 'thetoken')

    @mock.patch(f'{mail.__name__}.smtplib.SMTP')
    def test_disconnect_is_retried(self, mock_smtp):
        """A dropped connection is retried before giving up."""
        conn = mock_smtp.return_value.__enter__.return_value
        conn.send_message.side_effect = [
            smtplib.SMTPServerDisconnected('gone'), None
        ]
        with mock.patch('time.sleep'):
            self.session.send_confirmation('a@b.com', 'thetoken')
        self.assertEqual(conn.send_message.call_count, 2)


class TestNullMailer(TestCase):
    """Tokens are logged when mail is disabled."""

    def test_send_confirmation(self):
        """Nothing is sent, but the link is logged."""
        mailer = mail.NullMailer('/confirm?token={token}')
        with self.assertLogs(mail.__name__, level='DEBUG') as logs:
            mailer.send_confirmation('a@b.com', 'thetoken')
        self.assertIn('/confirm?token=thetoken', logs.output[0])
