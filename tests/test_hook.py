from datetime import timedelta

import pytest

from dbhooks.hook import Hook, HookContext, HookManager, NamedValue, OpType


class RecordingHook(Hook):
    def __init__(self, name, journal, fail_before=False, fail_after=False):
        self.name = name
        self.journal = journal
        self.fail_before = fail_before
        self.fail_after = fail_after

    def before(self, ctx):
        self.journal.append(("before", self.name))
        if self.fail_before:
            raise RuntimeError(f"before {self.name}")

    def after(self, ctx):
        self.journal.append(("after", self.name))
        if self.fail_after:
            raise RuntimeError(f"after {self.name}")


@pytest.mark.parametrize(
    "op, text",
    [
        (OpType.CONNECT, "Connect"),
        (OpType.BEGIN, "Begin"),
        (OpType.COMMIT, "Commit"),
        (OpType.ROLLBACK, "Rollback"),
        (OpType.PREPARE, "Prepare"),
        (OpType.STMT_EXEC, "StmtExec"),
        (OpType.STMT_QUERY, "StmtQuery"),
        (OpType.STMT_CLOSE, "StmtClose"),
        (OpType.EXEC, "Exec"),
        (OpType.QUERY, "Query"),
        (OpType.PING, "Ping"),
    ],
)
def test_op_type_text(op, text):
    assert str(op) == text
    assert f"{op}" == text


@pytest.mark.parametrize(
    "value, text",
    [(0, "Connect"), (1, "Begin"), (4, "Prepare"), (9, "Query"), (10, "Ping")],
)
def test_op_type_values_follow_declaration_order(value, text):
    ctx = HookContext(OpType(value))
    assert int(ctx.op_type) == value
    assert str(ctx.op_type) == text


def test_context_keeps_operation_details():
    args = [NamedValue(1, ordinal=1), NamedValue("a", name="n", ordinal=2)]
    ctx = HookContext(OpType.QUERY, "SELECT ?", args)
    assert ctx.op_type is OpType.QUERY
    assert ctx.query == "SELECT ?"
    assert ctx.args == tuple(args)
    assert ctx.end_time is None
    assert ctx.origin_error is None
    assert ctx.origin_result is None


def test_context_defaults_to_no_args():
    ctx = HookContext(OpType.PING)
    assert ctx.args == ()
    assert ctx.query == ""


def test_set_result_records_outcome_and_end_time():
    ctx = HookContext(OpType.EXEC, "UPDATE t SET a = 1")
    error = ValueError("bad")
    ctx.set_result("result", error)
    assert ctx.origin_result == "result"
    assert ctx.origin_error is error
    assert ctx.end_time is not None
    assert ctx.end_time >= ctx.start_time
    assert ctx.duration() == ctx.end_time - ctx.start_time
    assert ctx.duration() >= timedelta(0)


def test_duration_is_zero_before_result():
    ctx = HookContext(OpType.BEGIN)
    assert ctx.duration() == timedelta(0)


def test_hook_values_round_trip():
    ctx = HookContext(OpType.CONNECT)
    ctx.set_hook_value("k", [1, 2])
    assert ctx.get_hook_value("k") == [1, 2]
    ctx.set_hook_value("k", "replaced")
    assert ctx.get_hook_value("k") == "replaced"


def test_missing_hook_value_raises_key_error():
    ctx = HookContext(OpType.CONNECT)
    with pytest.raises(KeyError):
        ctx.get_hook_value("absent")


def test_manager_runs_before_in_order_and_after_in_reverse():
    journal = []
    manager = HookManager()
    manager.add_hook(RecordingHook("a", journal))
    manager.add_hook(RecordingHook("b", journal))
    ctx = HookContext(OpType.QUERY)
    manager.before(ctx)
    manager.after(ctx)
    assert journal == [
        ("before", "a"),
        ("before", "b"),
        ("after", "b"),
        ("after", "a"),
    ]
    assert len(manager) == 2


def test_manager_before_stops_at_first_error():
    journal = []
    manager = HookManager(
        [
            RecordingHook("a", journal, fail_before=True),
            RecordingHook("b", journal),
        ]
    )
    with pytest.raises(RuntimeError, match="before a"):
        manager.before(HookContext(OpType.EXEC))
    assert journal == [("before", "a")]


def test_manager_after_stops_at_first_error():
    journal = []
    manager = HookManager(
        [
            RecordingHook("a", journal),
            RecordingHook("b", journal, fail_after=True),
        ]
    )
    with pytest.raises(RuntimeError, match="after b"):
        manager.after(HookContext(OpType.EXEC))
    assert journal == [("after", "b")]


def test_empty_manager_leaves_context_untouched():
    manager = HookManager()
    ctx = HookContext(OpType.PING)
    manager.before(ctx)
    manager.after(ctx)
    assert len(manager) == 0
    assert ctx.end_time is None