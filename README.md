# dbhooks

Hooks around database operations, ready-made logging hooks, an SQL logging
adapter, and a small Redis client layer.

## Installation

```
pip install dbhooks
```

To run the tests as well:

```
pip install "dbhooks[test]"
pytest
```

## Hooks around a database driver

`KitDriver` wraps an existing driver object and calls a `Hook` before and
after every operation. These operations are covered:

- connecting
- preparing, executing and querying statements
- pinging
- beginning, committing and rolling back transactions

Each call gets a `HookContext`, which carries the following:

- the operation, as an `OpType`
- the query and its `NamedValue` arguments
- the start and end times, and `duration()`
- the original result and error
- a key/value store, read with `get_hook_value` and written with `set_hook_value`

A hook's `before` may raise to stop the operation before it runs. A hook's
`after` may raise to replace the result with its own error.

```python
from dbhooks.driver import KitDriver
from dbhooks.hook import HookManager
from dbhooks.hook_log import HookLogError, HookLogSlow

manager = HookManager()
manager.add_hook(HookLogError(...))
manager.add_hook(HookLogSlow(...))

driver = KitDriver(raw_driver, manager)
conn = driver.open("dsn")
conn.execute("UPDATE t SET a = ? WHERE id = ?", args)
```

`HookManager` runs the `before` methods of its hooks in the order they were
added. It runs their `after` methods in reverse order. It stops at the first
error.

Operations that the wrapped driver does not support raise `NotSupportedError`.

### Logging hooks

- `HookLogError` logs every operation that failed. The entry holds the
  operation, its duration, the namespace, the query and the arguments.
- `HookLogSlow` logs a warning for every operation whose duration reaches the
  threshold.

## SQL logger adapter

`SqlLogger` routes trace and message logging from an ORM-style layer into a
standard logger. It works at one of the `LogLevel` levels.
`level_from_logging` maps a `logging` level to a `LogLevel`.

`log_mode(level)` returns a new logger that uses the given level. The original
logger is left unchanged.

`trace(begin, fc, error)` writes one entry per statement, in this format:

```
[elapsed ms] [rows:N] sql
```

The level of that entry is chosen as follows:

- error, when an error was passed in
- warning, when the statement took more than one second
- info, otherwise

## Redis

`RedisClient` is a thin layer over a Redis connection. It provides:

- `do` for raw commands
- `pipelined` and `tx_pipelined` for pipelines and transactions
- `subscribe` and `psubscribe` for publish/subscribe
- the scripting commands: `eval`, `eval_ro`, `evalsha`, `evalsha_ro`,
  `script_exists`, `script_load`, `script_flush` and `script_kill`

`RedisExtension` wraps a client and adds the following methods:

- `get(key)`
- `set(key, value, expiration)`
- `delete(key)`
- `expire(key, expiration)`

```python
from dbhooks.redis_client import RedisClient
from dbhooks.redis_extension import RedisExtension

client = RedisClient()
ext = RedisExtension(client)
ext.set("key", "value", 10)
print(ext.get("key"))
```