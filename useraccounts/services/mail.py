"""
Delivers confirmation tokens by e-mail.

This is the out-of-band channel of the confirmation handshake: the token is
sent to the address on the account, and proves control of that address when
it comes back to :meth:`.AccountLifecycle.confirm`.
"""

from email.message import EmailMessage
from typing import Optional
import logging
import smtplib

from retry import retry

from ..exceptions import DeliveryFailed

logger = logging.getLogger(__name__)

SUBJECT = 'Please confirm your e-mail address'

BODY = """Welcome!

To confirm your e-mail address, please visit:

    {link}

If you did not create an account, you can ignore this message.
"""


class MailSession(object):
    """Sends confirmation messages through an SMTP service."""

    def __init__(self, host: str = 'localhost', port: int = 25,
                 sender: str = 'noreply@localhost',
                 confirmation_url: str = '/confirm?token={token}',
                 timeout: float = 10.0) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._confirmation_url = confirmation_url
        self._timeout = timeout

    def _new_connection(self) -> smtplib.SMTP:
        return smtplib.SMTP(host=self._host, port=self._port,
                            timeout=self._timeout)

    def compose(self, email: str, token: str) -> EmailMessage:
        """Build the confirmation message for ``email``."""
        message = EmailMessage()
        message['Subject'] = SUBJECT
        message['From'] = self._sender
        message['To'] = email
        link = self._confirmation_url.format(token=token)
        message.set_content(BODY.format(link=link))
        return message

    def send_confirmation(self, email: str, token: str) -> None:
        """
        Send a confirmation token to an e-mail address.

        Raises
        ------
        :class:`.DeliveryFailed`
            Raised if the message could not be handed to the SMTP service.

        """
        message = self.compose(email, token)
        try:
            self._send(message)
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryFailed(f'Could not send confirmation: {e}') from e
        logger.info('Sent confirmation message')

    @retry((smtplib.SMTPServerDisconnected, ConnectionError),
           tries=3, delay=0.5, backoff=2)
    def _send(self, message: EmailMessage) -> None:
        with self._new_connection() as conn:
            conn.send_message(message)


class NullMailer(object):
    """Logs confirmation tokens instead of sending them. For development."""

    def __init__(self, confirmation_url: Optional[str] = None) -> None:
        self._confirmation_url = confirmation_url or '/confirm?token={token}'

    def send_confirmation(self, email: str, token: str) -> None:
        """Log the confirmation link at debug level."""
        logger.debug('Mail disabled; confirmation link for new account: %s',
                     self._confirmation_url.format(token=token))
