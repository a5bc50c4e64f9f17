"""A small Redis client exposing commands, pipelines, pub/sub and Lua scripts."""

from __future__ import annotations

from typing import Any, Callable

import redis
from redis.client import PubSub

DEFAULT_ADDR = "127.0.0.1:6379"
DEFAULT_PASSWORD = ""
_DEFAULT_PORT = 6379

#: Errors raised by the underlying client, re-exported for callers.
RedisError = redis.exceptions.RedisError
ResponseError = redis.exceptions.ResponseError
ConnectionError = redis.exceptions.ConnectionError  # noqa: A001
WatchError = redis.exceptions.WatchError
NoScriptError = redis.exceptions.NoScriptError

__all__ = [
    "DEFAULT_ADDR",
    "DEFAULT_PASSWORD",
    "ConnectionError",
    "NoScriptError",
    "PubSub",
    "RedisClient",
    "RedisError",
    "ResponseError",
    "WatchError",
]


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, _DEFAULT_PORT
    return host or "localhost", int(port)


class RedisClient:
    """Redis connection to ``addr`` ("host:port"), optionally with a password.

    Replies are decoded to ``str``. A missing value comes back as ``None``;
    server errors are raised as :class:`ResponseError`.
    """

    def __init__(
        self,
        addr: str = DEFAULT_ADDR,
        password: str = DEFAULT_PASSWORD,
        *,
        client: Any = None,
    ) -> None:
        self.addr = addr
        self.password = password
        if client is None:
            host, port = _split_addr(addr)
            client = redis.Redis(
                host=host,
                port=port,
                password=password or None,
                decode_responses=True,
            )
        self.client = client

    def __enter__(self) -> RedisClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def do(self, *args: Any) -> Any:
        """Run an arbitrary command, e.g. ``do("SET", "key", "value")``."""
        return self.client.execute_command(*args)

    def _run_pipeline(self, fn: Callable[[Any], None], transaction: bool) -> list[Any]:
        with self.client.pipeline(transaction=transaction) as pipe:
            fn(pipe)
            return pipe.execute()

    def pipelined(self, fn: Callable[[Any], None]) -> list[Any]:
        """Queue commands with ``fn(pipe)`` and send them in one round trip.

        If ``fn`` raises, nothing is sent. The first failed command's error
        is raised after all replies are read.
        """
        return self._run_pipeline(fn, transaction=False)

    def tx_pipelined(self, fn: Callable[[Any], None]) -> list[Any]:
        """Like :meth:`pipelined`, but wrapped in MULTI/EXEC."""
        return self._run_pipeline(fn, transaction=True)

    def subscribe(self, *channels: str) -> PubSub:
        """Return a pub/sub handle subscribed to ``channels``."""
        pubsub = self.client.pubsub()
        if channels:
            pubsub.subscribe(*channels)
        return pubsub

    def psubscribe(self, *patterns: str) -> PubSub:
        """Return a pub/sub handle subscribed to channel ``patterns``."""
        pubsub = self.client.pubsub()
        if patterns:
            pubsub.psubscribe(*patterns)
        return pubsub

    def eval(self, script: str, keys: list[str], *args: Any) -> Any:
        """Run a Lua script with ``keys`` as KEYS and ``args`` as ARGV."""
        keys = list(keys)
        return self.client.eval(script, len(keys), *keys, *args)

    def eval_ro(self, script: str, keys: list[str], *args: Any) -> Any:
        """Run a read-only Lua script."""
        keys = list(keys)
        return self.client.eval_ro(script, len(keys), *keys, *args)

    def evalsha(self, sha1: str, keys: list[str], *args: Any) -> Any:
        """Run a cached script by its SHA1 digest."""
        keys = list(keys)
        return self.client.evalsha(sha1, len(keys), *keys, *args)

    def evalsha_ro(self, sha1: str, keys: list[str], *args: Any) -> Any:
        """Run a cached read-only script by its SHA1 digest."""
        keys = list(keys)
        return self.client.evalsha_ro(sha1, len(keys), *keys, *args)

    def script_exists(self, *hashes: str) -> list[bool]:
        """Report, for each digest, whether the script is cached."""
        return list(self.client.script_exists(*hashes))

    def script_load(self, script: str) -> str:
        """Cache ``script`` on the server and return its SHA1 digest."""
        return self.client.script_load(script)

    def script_flush(self) -> Any:
        """Remove all cached scripts."""
        return self.client.script_flush()

    def script_kill(self) -> Any:
        """Stop the script currently running on the server."""
        return self.client.script_kill()

    def close(self) -> None:
        """Release the client's connections."""
        self.client.close()