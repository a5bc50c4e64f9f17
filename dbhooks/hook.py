"""Hook points around database operations and the context they receive."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any, Iterable


class OpType(IntEnum):
    """Kind of database operation a hook is called for."""

    CONNECT = 0
    BEGIN = 1
    COMMIT = 2
    ROLLBACK = 3
    PREPARE = 4
    STMT_EXEC = 5
    STMT_QUERY = 6
    STMT_CLOSE = 7
    EXEC = 8
    QUERY = 9
    PING = 10

    def __str__(self) -> str:
        return _OP_NAMES[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_OP_NAMES = {
    OpType.CONNECT: "Connect",
    OpType.BEGIN: "Begin",
    OpType.COMMIT: "Commit",
    OpType.ROLLBACK: "Rollback",
    OpType.PREPARE: "Prepare",
    OpType.STMT_EXEC: "StmtExec",
    OpType.STMT_QUERY: "StmtQuery",
    OpType.STMT_CLOSE: "StmtClose",
    OpType.EXEC: "Exec",
    OpType.QUERY: "Query",
    OpType.PING: "Ping",
}


@dataclass(frozen=True)
class NamedValue:
    """A statement argument, optionally named, with its 1-based position."""

    value: Any
    name: str = ""
    ordinal: int = 0


class HookContext:
    """Details of one database operation: what ran, when, and how it ended."""

    def __init__(
        self,
        op_type: OpType,
        query: str = "",
        args: Iterable[NamedValue] | None = None,
    ) -> None:
        self.op_type = OpType(op_type)
        self.query = query
        self.args: tuple[NamedValue, ...] = tuple(args or ())
        self.start_time: datetime = datetime.now()
        self.end_time: datetime | None = None
        self.origin_result: Any = None
        self.origin_error: BaseException | None = None
        self._values: dict[str, Any] = {}
        self._lock = threading.Lock()

    def set_result(self, result: Any, error: BaseException | None) -> None:
        """Record the outcome of the operation and stamp its end time."""
        self.origin_result = result
        self.origin_error = error
        self.end_time = datetime.now()

    def duration(self) -> timedelta:
        """Time between start and end; zero while the operation is unfinished."""
        if self.end_time is None:
            return timedelta(0)
        return self.end_time - self.start_time

    def get_hook_value(self, key: str) -> Any:
        """Return a value stored by a hook; raise KeyError if there is none."""
        with self._lock:
            return self._values[key]

    def set_hook_value(self, key: str, value: Any) -> None:
        """Store a value for hooks to share during this operation."""
        with self._lock:
            self._values[key] = value

    def __repr__(self) -> str:
        return (
            f"HookContext(op_type={self.op_type!s}, query={self.query!r}, "
            f"args={self.args!r})"
        )


class Hook(ABC):
    """Called before and after each database operation.

    Raising from either method aborts the operation with that exception.
    """

    @abstractmethod
    def before(self, ctx: HookContext) -> None:
        """Run before the operation."""

    @abstractmethod
    def after(self, ctx: HookContext) -> None:
        """Run after the operation, once its result is set."""


class HookManager(Hook):
    """Runs a chain of hooks: ``before`` in order, ``after`` in reverse."""

    def __init__(self, hooks: Iterable[Hook] = ()) -> None:
        self._hooks: list[Hook] = list(hooks)

    def add_hook(self, hook: Hook) -> None:
        """Append a hook to the chain."""
        self._hooks.append(hook)

    def before(self, ctx: HookContext) -> None:
        for hook in self._hooks:
            hook.before(ctx)

    def after(self, ctx: HookContext) -> None:
        for hook in reversed(self._hooks):
            hook.after(ctx)

    def __len__(self) -> int:
        return len(self._hooks)