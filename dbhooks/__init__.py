"""Hookable database driver wrappers, SQL logging adapters and a Redis client layer."""

__version__ = "0.1.0"

__all__ = [
    "driver",
    "hook",
    "hook_log",
    "redis_client",
    "redis_extension",
    "sql_logger",
]