"""Application factory for the accounts app."""

from typing import Any, Mapping, Optional

from flask import Flask

from . import app_logging, context
from .lifecycle import MailerPort
from .routes import api


def create_web_app(config: Optional[Mapping[str, Any]] = None,
                   mailer: Optional[MailerPort] = None) -> Flask:
    """
    Initialize and configure the accounts application.

    Parameters
    ----------
    config : mapping
        Values that override those in :mod:`useraccounts.config`.
    mailer : object
        Delivers confirmation tokens. If not provided, one is chosen based on
        the ``MAIL_ENABLED`` config value.

    """
    app = Flask('useraccounts')
    app.config.from_object('useraccounts.config')
    if config is not None:
        app.config.update(config)

    app_logging.setup_logger(int(app.config['LOGLEVEL']))
    context.init_app(app, mailer=mailer)
    app.register_blueprint(api.blueprint)
    return app
