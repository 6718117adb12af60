"""
Controllers for account lifecycle requests.

When a user logs in, a session is registered in the distributed keystore and
the user is issued a signed cookie that identifies it. Subsequent requests
present that cookie; the route resolves it to a session ID (or ``None``,
for an anonymous client) before calling these controllers.
"""

from http import HTTPStatus as status
from typing import Any, Dict, Optional, Tuple
import logging

from werkzeug.exceptions import InternalServerError

from ..exceptions import DuplicateAccount, ValidationFailed, \
    InvalidCredentials, EmailNotConfirmed, Unauthorized, NotFound, \
    SessionCreationFailed, SessionDeletionFailed, TokenStoreFailed
from ..lifecycle import AccountLifecycle
from ..services.sessions import SessionStore

logger = logging.getLogger(__name__)

ResponseData = Tuple[dict, int, dict]

NOT_LOGGED_IN = {'reason': 'Not logged in'}


def _field(payload: Optional[dict], name: str) -> str:
    if not isinstance(payload, dict):
        return ''
    value = payload.get(name)
    return value if isinstance(value, str) else ''


def create_account(lifecycle: AccountLifecycle,
                   payload: Optional[dict]) -> ResponseData:
    """Handle a request to create a new account."""
    email = _field(payload, 'email')
    password = _field(payload, 'password')
    try:
        lifecycle.create(email, password)
    except DuplicateAccount as e:
        return {'reason': str(e)}, status.CONFLICT, {}
    except ValidationFailed as e:
        return {'reason': str(e), 'errors': e.errors}, \
            status.BAD_REQUEST, {}
    except TokenStoreFailed as e:
        logger.error('Could not issue confirmation token: %s', e)
        raise InternalServerError('Could not create account') from e
    return {'created': True}, status.CREATED, {}


def confirm_account(lifecycle: AccountLifecycle,
                    payload: Optional[dict]) -> ResponseData:
    """Handle a request to redeem a confirmation token."""
    token = _field(payload, 'token')
    try:
        confirmed = lifecycle.confirm(token)
    except TokenStoreFailed as e:
        logger.error('Could not consume confirmation token: %s', e)
        raise InternalServerError('Could not confirm account') from e
    return {'confirmed': confirmed}, status.OK, {}


def resend_confirmation(lifecycle: AccountLifecycle,
                        payload: Optional[dict]) -> ResponseData:
    """Handle a request for a new confirmation token."""
    email = _field(payload, 'email')
    try:
        lifecycle.resend_confirmation(email)
    except TokenStoreFailed as e:
        logger.error('Could not issue confirmation token: %s', e)
        raise InternalServerError('Could not send confirmation') from e
    return {'sent': True}, status.ACCEPTED, {}


def login(lifecycle: AccountLifecycle, sessions: SessionStore,
          payload: Optional[dict]) -> ResponseData:
    """
    Log in with an e-mail address and password.

    Parameters
    ----------
    lifecycle : :class:`.AccountLifecycle`
    sessions : :class:`.SessionStore`
        Used to generate the session cookie.
    payload : dict
        Should include ``email`` and ``password``.

    Returns
    -------
    dict
        The public view of the account, and the session cookie.
    int
        Status code.
    dict
        Headers to add to the response.

    """
    email = _field(payload, 'email')
    password = _field(payload, 'password')
    try:
        account, session = lifecycle.login(email, password)
    except InvalidCredentials as e:
        logger.debug('Authentication failed: %s', e)
        return {'reason': str(e)}, status.UNAUTHORIZED, {}
    except EmailNotConfirmed as e:
        return {'reason': str(e)}, status.FORBIDDEN, {}
    except SessionCreationFailed as e:
        logger.error('Could not create session: %s', e)
        raise InternalServerError('Cannot log in') from e

    data: Dict[str, Any] = account.public()
    data['cookies'] = {
        'session_cookie': (sessions.generate_cookie(session),
                           session.expires)
    }
    return data, status.OK, {}


def logout(lifecycle: AccountLifecycle,
           session_id: Optional[str]) -> ResponseData:
    """
    Log out, and clear the session cookie.

    The cookie is cleared only once the session is gone from the store.
    """
    try:
        lifecycle.logout(session_id)
    except SessionDeletionFailed as e:
        logger.error('Logout failed: %s', e)
        raise InternalServerError('Cannot log out') from e
    data = {'logged_out': True, 'cookies': {'session_cookie': ('', 0)}}
    return data, status.OK, {}


def delete_account(lifecycle: AccountLifecycle,
                   session_id: Optional[str]) -> ResponseData:
    """Delete the account of the logged-in user, and log them out."""
    try:
        lifecycle.delete(session_id)
    except Unauthorized:
        return NOT_LOGGED_IN, status.UNAUTHORIZED, {}
    except SessionDeletionFailed as e:
        logger.error('Account deleted, but session remains: %s', e)
        raise InternalServerError('Cannot log out') from e
    data = {'deleted': True, 'cookies': {'session_cookie': ('', 0)}}
    return data, status.OK, {}


def current_user(lifecycle: AccountLifecycle,
                 session_id: Optional[str]) -> ResponseData:
    """Get the account of the logged-in user."""
    try:
        account = lifecycle.current_user(session_id)
    except Unauthorized:
        return NOT_LOGGED_IN, status.UNAUTHORIZED, {}
    except NotFound as e:
        logger.debug('Session outlived its account: %s', e)
        return {'reason': 'Account not found'}, status.NOT_FOUND, {}
    return account.public(), status.OK, {}
