"""
Application-scoped services.

The stores and the lifecycle manager are built once per application from its
configuration, and attached to ``app.extensions``. Request handlers get them
with :func:`get_services`; nothing else holds a global connection.
"""

from typing import Any, NamedTuple, Optional
import logging

from flask import Flask, current_app

from .lifecycle import AccountLifecycle, MailerPort
from .passwords import PasswordHasher
from .services import keystore
from .services.datastore import AccountStore, util as datastore_util
from .services.mail import MailSession, NullMailer
from .services.sessions import SessionStore
from .services.tokens import TokenStore

logger = logging.getLogger(__name__)

EXTENSION = 'useraccounts'


class Services(NamedTuple):
    """The collaborators of the account lifecycle, and the lifecycle."""

    redis: Any
    accounts: AccountStore
    tokens: TokenStore
    sessions: SessionStore
    lifecycle: AccountLifecycle


def _get_mailer(config: dict) -> MailerPort:
    if config.get('MAIL_ENABLED'):
        return MailSession(host=config['MAIL_HOST'],
                           port=int(config['MAIL_PORT']),
                           sender=config['MAIL_SENDER'],
                           confirmation_url=config['CONFIRMATION_URL'])
    return NullMailer(config.get('CONFIRMATION_URL'))


def init_app(app: Flask, mailer: Optional[MailerPort] = None) -> Services:
    """Build the services for ``app`` from its configuration."""
    config = app.config
    engine = datastore_util.new_engine(config['SQLALCHEMY_DATABASE_URI'])
    if config.get('CREATE_DB'):
        datastore_util.create_all(engine)

    r = keystore.from_config(config)
    accounts = AccountStore(datastore_util.new_session_factory(engine))
    tokens = TokenStore(r, int(config['CONFIRMATION_TOKEN_DURATION']))
    sessions = SessionStore(r, config['JWT_SECRET'],
                            int(config['SESSION_DURATION']))
    lifecycle = AccountLifecycle(
        accounts=accounts,
        tokens=tokens,
        sessions=sessions,
        hasher=PasswordHasher(rounds=int(config['BCRYPT_ROUNDS'])),
        mailer=mailer if mailer is not None else _get_mailer(config)
    )
    services = Services(r, accounts, tokens, sessions, lifecycle)
    app.extensions[EXTENSION] = services
    return services


def get_services(app: Optional[Flask] = None) -> Services:
    """Get the services of ``app``, or of the current application."""
    if app is None:
        app = current_app
    services: Services = app.extensions[EXTENSION]
    return services
