"""Connection to the key-value store that holds tokens and sessions."""

from typing import Any, Mapping
import logging

import fakeredis
import redis
from redis.cluster import RedisCluster

logger = logging.getLogger(__name__)


def new_connection(host: str = 'localhost', port: int = 6379, db: int = 0,
                   cluster: bool = False, fake: bool = False) -> Any:
    """
    Open a connection to Redis.

    In fact, the client instance is thread safe and connections are attached
    at the time a command is executed, so a single instance may be shared by
    every store in the application.
    """
    if fake:
        logger.debug('Using fakeredis in place of a Redis service')
        return fakeredis.FakeStrictRedis(server=fakeredis.FakeServer())
    logger.debug('New Redis connection at %s, port %s', host, port)
    if cluster:
        return RedisCluster(host=host, port=port)
    return redis.StrictRedis(host=host, port=port, db=db)


def from_config(config: Mapping) -> Any:
    """Open a connection to Redis using application configuration."""
    return new_connection(
        host=config.get('REDIS_HOST', 'localhost'),
        port=int(config.get('REDIS_PORT', '6379')),
        db=int(config.get('REDIS_DATABASE', '0')),
        cluster=str(config.get('REDIS_CLUSTER', '0')) == '1',
        fake=str(config.get('REDIS_FAKE', '0')) == '1'
    )


def is_available(r: Any) -> bool:
    """Check our connection to Redis."""
    try:
        r.ping()
    except Exception as e:
        logger.error('Encountered an error talking to Redis: %s', e)
        return False
    return True
