"""Database driver wrappers that run hooks around every operation.

The wrapped objects follow a small duck-typed protocol: a driver has
``open(name)``; a connection may offer ``prepare``, ``execute``, ``query``,
``ping``, ``begin``, ``check_named_value``, ``reset_session`` and ``close``;
a statement may offer ``execute``, ``query`` and ``close``; a transaction
offers ``commit`` and ``rollback``. Any other attribute is reached through
the wrapper unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from dbhooks.hook import Hook, HookContext, NamedValue, OpType

T = TypeVar("T")


class NotSupportedError(Exception):
    """The wrapped object does not offer the requested operation."""


class SkipCheck(Exception):
    """The wrapped connection has no argument checker; use the default one."""


def _run_hooked(
    hook: Hook,
    op_type: OpType,
    query: str,
    args: Iterable[NamedValue] | None,
    call: Callable[[], T],
) -> T:
    """Run ``call`` between the hook's ``before`` and ``after``.

    An exception from ``before`` stops the operation; one from ``after``
    replaces the operation's outcome. An error from ``call`` itself is
    recorded on the context and raised once ``after`` has run.
    """
    ctx = HookContext(op_type, query, args)
    hook.before(ctx)
    try:
        result = call()
    except Exception as exc:
        ctx.set_result(None, exc)
        hook.after(ctx)
        raise
    ctx.set_result(result, None)
    hook.after(ctx)
    return result


class _Delegating:
    """Forwards unknown attributes to the wrapped object."""

    _wrapped_attr = ""

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.__dict__[self._wrapped_attr], name)


class KitDriver:
    """Wraps a driver so that its connections run ``hook`` around operations."""

    def __init__(self, driver: Any, hook: Hook) -> None:
        self.driver = driver
        self.hook = hook

    def open(self, name: str) -> KitConnection:
        """Open a connection to the data source ``name`` and wrap it."""
        conn = _run_hooked(
            self.hook, OpType.CONNECT, "", None, lambda: self.driver.open(name)
        )
        return KitConnection(conn, self.hook)


class KitConnection(_Delegating):
    """A connection whose operations are surrounded by hook calls."""

    _wrapped_attr = "connection"

    def __init__(self, connection: Any, hook: Hook) -> None:
        self.connection = connection
        self.hook = hook

    def _method(self, name: str, message: str) -> Callable[..., Any]:
        method = getattr(self.connection, name, None)
        if method is None:
            raise NotSupportedError(message)
        return method

    def prepare(self, query: str) -> KitStatement:
        """Prepare ``query`` and return a hooked statement."""
        prepare = self._method("prepare", "driver does not support prepare context")
        stmt = _run_hooked(self.hook, OpType.PREPARE, query, None, lambda: prepare(query))
        return KitStatement(stmt, self.hook, query)

    def execute(self, query: str, args: Iterable[NamedValue] = ()) -> Any:
        """Execute ``query`` with ``args`` and return the driver's result."""
        execute = self._method("execute", "driver does not support exec context")
        values = list(args)
        return _run_hooked(
            self.hook, OpType.EXEC, query, values, lambda: execute(query, values)
        )

    def query(self, query: str, args: Iterable[NamedValue] = ()) -> Any:
        """Run ``query`` with ``args`` and return the driver's rows."""
        run_query = self._method("query", "driver does not support query context")
        values = list(args)
        return _run_hooked(
            self.hook, OpType.QUERY, query, values, lambda: run_query(query, values)
        )

    def ping(self) -> None:
        """Check that the connection is alive."""
        ping = self._method("ping", "driver does not support ping")
        _run_hooked(self.hook, OpType.PING, "", None, ping)

    def begin(self, options: Any = None) -> KitTransaction:
        """Start a transaction and return a hooked wrapper for it."""
        begin = self._method("begin", "driver does not support begin tx")
        tx = _run_hooked(self.hook, OpType.BEGIN, "", None, lambda: begin(options))
        return KitTransaction(tx, self.hook)

    def check_named_value(self, value: NamedValue) -> Any:
        """Let the wrapped connection check an argument.

        Raises SkipCheck when the connection has no checker of its own.
        """
        checker = getattr(self.connection, "check_named_value", None)
        if checker is None:
            raise SkipCheck("driver does not check named values")
        return checker(value)

    def reset_session(self) -> None:
        """Reset session state, if the wrapped connection supports it."""
        resetter = getattr(self.connection, "reset_session", None)
        if resetter is not None:
            resetter()

    def close(self) -> None:
        """Close the wrapped connection."""
        self.connection.close()


class KitStatement(_Delegating):
    """A prepared statement whose operations are surrounded by hook calls."""

    _wrapped_attr = "statement"

    def __init__(self, statement: Any, hook: Hook, query: str) -> None:
        self.statement = statement
        self.hook = hook
        self.query_text = query

    def execute(self, args: Iterable[NamedValue] = ()) -> Any:
        """Execute the statement with ``args``."""
        execute = getattr(self.statement, "execute", None)
        if execute is None:
            raise NotSupportedError("stmt does not support exec context")
        values = list(args)
        return _run_hooked(
            self.hook, OpType.STMT_EXEC, self.query_text, values, lambda: execute(values)
        )

    def query(self, args: Iterable[NamedValue] = ()) -> Any:
        """Run the statement as a query with ``args`` and return its rows."""
        run_query = getattr(self.statement, "query", None)
        if run_query is None:
            raise NotSupportedError("stmt does not support query context")
        values = list(args)
        return _run_hooked(
            self.hook,
            OpType.STMT_QUERY,
            self.query_text,
            values,
            lambda: run_query(values),
        )

    def close(self) -> None:
        """Close the statement."""
        _run_hooked(
            self.hook, OpType.STMT_CLOSE, self.query_text, None, self.statement.close
        )


class KitTransaction(_Delegating):
    """A transaction whose commit and rollback are surrounded by hook calls."""

    _wrapped_attr = "transaction"

    def __init__(self, transaction: Any, hook: Hook) -> None:
        self.transaction = transaction
        self.hook = hook

    def commit(self) -> None:
        """Commit the transaction."""
        _run_hooked(self.hook, OpType.COMMIT, "", None, self.transaction.commit)

    def rollback(self) -> None:
        """Roll the transaction back."""
        _run_hooked(self.hook, OpType.ROLLBACK, "", None, self.transaction.rollback)