"""Log formatting for the accounts service."""

import logging

from pythonjsonlogger import jsonlogger

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """Send JSON-formatted log records from this package to stderr."""
    logger = logging.getLogger('useraccounts')
    if not any(getattr(h, '_useraccounts', False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(jsonlogger.JsonFormatter(
            FORMAT,
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        ))
        handler._useraccounts = True     # type: ignore
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
