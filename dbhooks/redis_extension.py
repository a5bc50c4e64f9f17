"""Redis client with shortcuts for GET, SET, DEL and EXPIRE."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable

from dbhooks.redis_client import PubSub, RedisClient


def _seconds(expiration: timedelta | float) -> int | float:
    """Express ``expiration`` in seconds, as an int when it is whole."""
    if isinstance(expiration, timedelta):
        seconds = expiration.total_seconds()
    else:
        seconds = float(expiration)
    return int(seconds) if seconds.is_integer() else seconds


class RedisExtension:
    """Wraps a Redis client and adds key-value shortcuts.

    Every other call is passed to the wrapped client unchanged.
    """

    def __init__(self, redis: Any) -> None:
        self.redis = redis

    def __enter__(self) -> RedisExtension:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def do(self, *args: Any) -> Any:
        """Run an arbitrary command."""
        return self.redis.do(*args)

    def pipelined(self, fn: Callable[[Any], None]) -> list[Any]:
        """Queue commands with ``fn(pipe)`` and send them in one round trip."""
        return self.redis.pipelined(fn)

    def tx_pipelined(self, fn: Callable[[Any], None]) -> list[Any]:
        """Queue commands with ``fn(pipe)`` and send them as a transaction."""
        return self.redis.tx_pipelined(fn)

    def subscribe(self, *channels: str) -> PubSub:
        """Return a pub/sub handle subscribed to ``channels``."""
        return self.redis.subscribe(*channels)

    def psubscribe(self, *patterns: str) -> PubSub:
        """Return a pub/sub handle subscribed to channel ``patterns``."""
        return self.redis.psubscribe(*patterns)

    def eval(self, script: str, keys: list[str], *args: Any) -> Any:
        """Run a Lua script."""
        return self.redis.eval(script, keys, *args)

    def eval_ro(self, script: str, keys: list[str], *args: Any) -> Any:
        """Run a read-only Lua script."""
        return self.redis.eval_ro(script, keys, *args)

    def evalsha(self, sha1: str, keys: list[str], *args: Any) -> Any:
        """Run a cached script by its SHA1 digest."""
        return self.redis.evalsha(sha1, keys, *args)

    def evalsha_ro(self, sha1: str, keys: list[str], *args: Any) -> Any:
        """Run a cached read-only script by its SHA1 digest."""
        return self.redis.evalsha_ro(sha1, keys, *args)

    def script_exists(self, *hashes: str) -> list[bool]:
        """Report, for each digest, whether the script is cached."""
        return self.redis.script_exists(*hashes)

    def script_load(self, script: str) -> str:
        """Cache ``script`` and return its SHA1 digest."""
        return self.redis.script_load(script)

    def get(self, key: str) -> Any:
        """Return the value of ``key``, or None if it does not exist."""
        return self.redis.do("GET", key)

    def set(self, key: str, value: Any, expiration: timedelta | float) -> Any:
        """Set ``key`` to ``value``, expiring after ``expiration`` seconds."""
        return self.redis.do("SET", key, value, "EX", _seconds(expiration))

    def delete(self, key: str) -> Any:
        """Delete ``key`` and return how many keys were removed."""
        return self.redis.do("DEL", key)

    def expire(self, key: str, expiration: timedelta | float) -> Any:
        """Set the time to live of ``key``; 1 if set, 0 if the key is missing."""
        return self.redis.do("EXPIRE", key, _seconds(expiration))

    def script_flush(self) -> Any:
        """Remove all cached scripts; None unless wrapping a RedisClient."""
        if isinstance(self.redis, RedisClient):
            return self.redis.script_flush()
        return None

    def script_kill(self) -> Any:
        """Stop the running script; None unless wrapping a RedisClient."""
        if isinstance(self.redis, RedisClient):
            return self.redis.script_kill()
        return None

    def close(self) -> None:
        """Close the wrapped client."""
        self.redis.close()