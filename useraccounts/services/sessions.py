"""
Internal service API for the distributed session store.

Used to create, look up and destroy authenticated sessions. Session data
is held in the key-value store as a signed JSON web token, keyed by session
ID. The session cookie issued to the client is a separate JWT that contains
only what is needed to find and verify the session: its ID, a nonce, and
its expiry.
"""

from typing import Any, Optional
from datetime import datetime, timedelta
import logging
import random
import uuid

import dateutil.parser
import jwt
import redis
from pytz import UTC

from .. import domain
from ..exceptions import SessionCreationFailed, SessionDeletionFailed, \
    InvalidToken, UnknownSession

logger = logging.getLogger(__name__)

KEY_PREFIX = 'session:'


def _generate_nonce(length: int = 8) -> str:
    return ''.join([str(random.randint(0, 9)) for i in range(length)])


class SessionStore(object):
    """
    Manages sessions in Redis.

    The Redis client is thread safe and connections are attached at the time
    a command is executed. This class simply provides a container for
    configuration.
    """

    def __init__(self, r: Any, secret: str, duration: int = 7200) -> None:
        self.r = r
        self._secret = secret
        self._duration = duration

    def create(self, account_id: str,
               session_id: Optional[str] = None) -> domain.Session:
        """
        Create a new session.

        Parameters
        ----------
        account_id : str
            The authenticated account.
        session_id : str
            Optional session ID. A new one is generated if not provided.

        Returns
        -------
        :class:`.domain.Session`

        Raises
        ------
        :class:`.SessionCreationFailed`

        """
        if session_id is None:
            session_id = str(uuid.uuid4())
        start_time = datetime.now(tz=UTC)
        end_time = start_time + timedelta(seconds=self._duration)
        session = domain.Session(
            session_id=session_id,
            account_id=account_id,
            start_time=start_time,
            end_time=end_time,
            nonce=_generate_nonce()
        )

        try:
            self.r.set(self._key(session_id),
                       self._encode(domain.to_dict(session)),
                       ex=self._duration)
        except redis.exceptions.ConnectionError as e:
            raise SessionCreationFailed(f'Connection failed: {e}') from e
        except Exception as e:
            raise SessionCreationFailed(f'Failed to create: {e}') from e

        logger.debug('Created session %s', session_id)
        return session

    def get(self, session_id: Optional[str]) -> Optional[str]:
        """
        Get the account bound to a session.

        Returns ``None`` if there is no such session, or it has expired.
        """
        if not session_id:
            return None
        try:
            session = self.load_by_id(session_id)
        except (UnknownSession, InvalidToken) as e:
            logger.debug('No usable session %s: %s', session_id, e)
            return None
        if session.expired:
            return None
        return session.account_id

    def destroy(self, session_id: str) -> None:
        """
        Delete a session in the key-value store by ID.

        Parameters
        ----------
        session_id : str

        Raises
        ------
        :class:`.SessionDeletionFailed`

        """
        try:
            self.r.delete(self._key(session_id))
        except redis.exceptions.ConnectionError as e:
            raise SessionDeletionFailed(f'Connection failed: {e}') from e
        except Exception as e:
            raise SessionDeletionFailed(f'Failed to delete: {e}') from e
        logger.debug('Destroyed session %s', session_id)

    def load_by_id(self, session_id: str) -> domain.Session:
        """Get session data by session ID."""
        session_jwt = self.r.get(self._key(session_id))
        if not session_jwt:
            raise UnknownSession(f'Failed to find session {session_id}')
        return self._decode(session_jwt)

    def generate_cookie(self, session: domain.Session) -> str:
        """Generate a cookie value from a :class:`.domain.Session`."""
        return self._pack_cookie({
            'session_id': session.session_id,
            'nonce': session.nonce,
            'expires': session.end_time.isoformat()
            if session.end_time else None
        })

    def load(self, cookie: str) -> domain.Session:
        """
        Load a session using a session cookie.

        Raises
        ------
        :class:`.InvalidToken`
            Raised if the cookie is malformed or expired, or does not match
            the stored session.
        :class:`.UnknownSession`
            Raised if the session does not exist.

        """
        cookie_data = self._unpack_cookie(cookie)
        try:
            session_id = cookie_data['session_id']
            expires = cookie_data['expires']
        except KeyError as e:
            raise InvalidToken('Cookie payload malformed') from e

        if expires and dateutil.parser.parse(expires) <= datetime.now(tz=UTC):
            raise InvalidToken('Session has expired')

        session = self.load_by_id(session_id)
        if session.expired:
            raise InvalidToken('Session has expired')
        if cookie_data.get('nonce') != session.nonce:
            raise InvalidToken('Invalid token; likely a forgery')
        return session

    def session_id_from_cookie(self, cookie: Optional[str]) -> Optional[str]:
        """
        Get the ID of the session identified by a cookie, if it is usable.

        Any cookie that cannot be verified against an active session is
        treated as no cookie at all.
        """
        if not cookie:
            return None
        try:
            return self.load(cookie).session_id
        except (InvalidToken, UnknownSession) as e:
            logger.debug('Ignoring session cookie: %s', e)
            return None

    def _key(self, session_id: str) -> str:
        return f'{KEY_PREFIX}{session_id}'

    def _encode(self, session_data: dict) -> str:
        return jwt.encode(session_data, self._secret, algorithm='HS256')

    def _decode(self, session_jwt: Any) -> domain.Session:
        if isinstance(session_jwt, bytes):
            session_jwt = session_jwt.decode('ascii')
        try:
            session: domain.Session = domain.from_dict(
                domain.Session,
                jwt.decode(session_jwt, self._secret, algorithms=['HS256'])
            )
        except jwt.exceptions.InvalidTokenError as e:
            raise InvalidToken('Invalid or corrupted session token') from e
        return session

    def _unpack_cookie(self, cookie: str) -> dict:
        try:
            data = dict(jwt.decode(cookie, self._secret, algorithms=['HS256']))
        except jwt.exceptions.InvalidTokenError as e:
            raise InvalidToken('Session cookie is malformed') from e
        return data

    def _pack_cookie(self, cookie_data: dict) -> str:
        return jwt.encode(cookie_data, self._secret, algorithm='HS256')
