"""Hooks that log failed and slow database operations."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from dbhooks.hook import Hook, HookContext


def _fields(ctx: HookContext, namespace: str, duration: timedelta) -> dict[str, Any]:
    fields: dict[str, Any] = {"operation": ctx.op_type, "duration": duration}
    if namespace:
        fields["namespace"] = namespace
    if ctx.query:
        fields["query"] = ctx.query
    args = ", ".join(str(arg.value) for arg in ctx.args)
    if args:
        fields["args"] = args
    return fields


def _render(fields: dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


class HookLogError(Hook):
    """Logs every operation that ended with an error, at ERROR level.

    The structured fields are attached to the record as ``fields``.
    """

    def __init__(self, namespace: str, logger: logging.Logger) -> None:
        self.namespace = namespace
        self.logger = logger

    def before(self, ctx: HookContext) -> None:
        return None

    def after(self, ctx: HookContext) -> None:
        if ctx.origin_error is None:
            return
        fields = _fields(ctx, self.namespace, ctx.duration())
        self.logger.error(
            "%s %s", ctx.origin_error, _render(fields), extra={"fields": fields}
        )


class HookLogSlow(Hook):
    """Logs every operation that took at least ``threshold``, at WARNING level.

    The structured fields are attached to the record as ``fields``.
    """

    def __init__(
        self,
        namespace: str,
        logger: logging.Logger,
        threshold: timedelta | float,
    ) -> None:
        self.namespace = namespace
        self.logger = logger
        if not isinstance(threshold, timedelta):
            threshold = timedelta(seconds=threshold)
        self.threshold = threshold

    def before(self, ctx: HookContext) -> None:
        return None

    def after(self, ctx: HookContext) -> None:
        duration = ctx.duration()
        if duration < self.threshold:
            return
        fields = _fields(ctx, self.namespace, duration)
        self.logger.warning("%s", _render(fields), extra={"fields": fields})