"""
Confirmation tokens in the key-value store.

A token maps to exactly one account ID, and expires on its own after
``duration`` seconds. Redeeming a token deletes it in the same command that
reads it, so no two callers can both redeem the same token.
"""

from typing import Any, Optional
from datetime import datetime, timedelta
import json
import logging
import secrets

import redis
from pytz import UTC

from .. import domain
from ..exceptions import TokenStoreFailed

logger = logging.getLogger(__name__)

KEY_PREFIX = 'confirm:'


class TokenStore(object):
    """Issues and redeems confirmation tokens."""

    def __init__(self, r: Any, duration: int = 86400) -> None:
        self.r = r
        self._duration = duration

    def issue(self, account_id: str) -> domain.ConfirmationToken:
        """
        Issue a new confirmation token for an account.

        Parameters
        ----------
        account_id : str

        Returns
        -------
        :class:`.domain.ConfirmationToken`

        Raises
        ------
        :class:`.TokenStoreFailed`

        """
        created = datetime.now(tz=UTC)
        token = domain.ConfirmationToken(
            token=secrets.token_urlsafe(32),
            account_id=account_id,
            created=created,
            expires=created + timedelta(seconds=self._duration)
        )
        try:
            self.r.set(self._key(token.token),
                       json.dumps(domain.to_dict(token)),
                       ex=self._duration)
        except redis.exceptions.ConnectionError as e:
            raise TokenStoreFailed(f'Connection failed: {e}') from e
        except Exception as e:
            raise TokenStoreFailed(f'Failed to issue: {e}') from e
        logger.debug('Issued confirmation token for account %s', account_id)
        return token

    def consume(self, token: str) -> Optional[str]:
        """
        Redeem a token, destroying it.

        Parameters
        ----------
        token : str

        Returns
        -------
        str or None
            The ID of the account to which the token belonged, or ``None`` if
            there is no such token (or it has expired).

        """
        if not token:
            return None
        try:
            raw = self.r.getdel(self._key(token))
        except redis.exceptions.ConnectionError as e:
            raise TokenStoreFailed(f'Connection failed: {e}') from e
        except Exception as e:
            raise TokenStoreFailed(f'Failed to consume: {e}') from e
        if raw is None:
            return None
        data: domain.ConfirmationToken = \
            domain.from_dict(domain.ConfirmationToken, json.loads(raw))
        if data.expired:     # The key outlived its expiry; same as absent.
            return None
        return data.account_id

    def _key(self, token: str) -> str:
        return f'{KEY_PREFIX}{token}'
