"""Provides routes for the account API."""

from http import HTTPStatus as status
from typing import Optional
import logging

from flask import Blueprint, Response, current_app, jsonify, \
    make_response, request
from werkzeug.exceptions import HTTPException

from ..context import get_services
from ..controllers import accounts
from ..services import keystore

logger = logging.getLogger(__name__)
blueprint = Blueprint('api', __name__, url_prefix='/api')


def _session_id() -> Optional[str]:
    """Resolve the session cookie on the request, if any, to a session ID."""
    cookie = request.cookies.get(current_app.config['SESSION_COOKIE_NAME'])
    return get_services().sessions.session_id_from_cookie(cookie)


def _payload() -> Optional[dict]:
    payload = request.get_json(force=True, silent=True)  # Any Content-Type.
    return payload if isinstance(payload, dict) else None


def set_cookies(response: Response, cookies: Optional[dict]) -> None:
    """
    Update a :class:`.Response` with cookies from controller data.

    Cookies are given as ``{key: (value, max_age)}``; the cookie name is
    the ``<KEY>_NAME`` config value. A ``max_age`` of 0 clears the cookie.
    """
    if not cookies:
        return None
    for cookie_key, (cookie_value, max_age) in cookies.items():
        cookie_name = current_app.config[f'{cookie_key.upper()}_NAME']
        params = dict(httponly=True, samesite='Lax',
                      domain=current_app.config.get('SESSION_COOKIE_DOMAIN'),
                      secure=current_app.config['SESSION_COOKIE_SECURE'])
        if max_age:
            logger.debug('Set cookie %s, max_age %s', cookie_name, max_age)
            response.set_cookie(cookie_name, cookie_value, max_age=max_age,
                                **params)
        else:
            logger.debug('Clear cookie %s', cookie_name)
            response.delete_cookie(cookie_name, **params)


def _respond(data: dict, code: int, headers: dict) -> Response:
    data = dict(data)
    cookies = data.pop('cookies', None)
    response = make_response(jsonify(data), code, headers)
    set_cookies(response, cookies)
    return response


@blueprint.errorhandler(HTTPException)
def handle_http_error(error: HTTPException) -> Response:
    """Render HTTP errors raised by controllers as JSON."""
    return make_response(jsonify({'reason': error.description}),
                         error.code)


@blueprint.route('/status', methods=['GET'])
def service_status() -> Response:
    """Health check endpoint."""
    services = get_services()
    data = {
        'database': services.accounts.is_available(),
        'keystore': keystore.is_available(services.redis)
    }
    code = status.OK if all(data.values()) else status.SERVICE_UNAVAILABLE
    return make_response(jsonify(data), code)


@blueprint.route('/accounts', methods=['POST'])
def create_account() -> Response:
    """Create a new account."""
    return _respond(*accounts.create_account(get_services().lifecycle,
                                             _payload()))


@blueprint.route('/accounts/confirm', methods=['POST'])
def confirm_account() -> Response:
    """Redeem a confirmation token."""
    return _respond(*accounts.confirm_account(get_services().lifecycle,
                                              _payload()))


@blueprint.route('/accounts/confirmation', methods=['POST'])
def resend_confirmation() -> Response:
    """Request a new confirmation token."""
    return _respond(*accounts.resend_confirmation(get_services().lifecycle,
                                                  _payload()))


@blueprint.route('/accounts/current', methods=['DELETE'])
def delete_account() -> Response:
    """Delete the account of the logged-in user."""
    return _respond(*accounts.delete_account(get_services().lifecycle,
                                             _session_id()))


@blueprint.route('/login', methods=['POST'])
def login() -> Response:
    """Log in with e-mail and password; sets the session cookie."""
    services = get_services()
    return _respond(*accounts.login(services.lifecycle, services.sessions,
                                    _payload()))


@blueprint.route('/logout', methods=['POST'])
def logout() -> Response:
    """Log out; clears the session cookie."""
    return _respond(*accounts.logout(get_services().lifecycle, _session_id()))


@blueprint.route('/user', methods=['GET'])
def current_user() -> Response:
    """Get the account of the logged-in user."""
    return _respond(*accounts.current_user(get_services().lifecycle,
                                           _session_id()))
