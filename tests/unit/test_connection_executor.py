"""
Unit tests for the single-statement connection executor.
"""

from datetime import datetime

import pytest

import domain.request_context as request_context
from domain.errors import DeadlineExceededError, InfrastructureError, NotFoundError
from domain.request_context import RequestContext
from infrastructure.connection_executor import ConnectionExecutor
from infrastructure.step import FunctionStep
from services.write_steps.content import InsertContentStep


pytestmark = pytest.mark.transactions


def test_runs_one_step_with_no_previous_result(sqlite_db):
    seen = []

    def run(previous, scope):
        seen.append(previous)
        scope.cursor.execute("SELECT COUNT(*) FROM page_content")
        return scope.cursor.fetchone()[0]

    assert ConnectionExecutor(sqlite_db).run(FunctionStep("count", run)) == 0
    assert seen == [None]


def test_statement_is_committed_on_its_own(sqlite_db):
    result = ConnectionExecutor(sqlite_db).run(InsertContentStep("body", datetime(2026, 3, 1, 12, 0, 0)))

    assert result.last_insert_id == 1
    assert sqlite_db.query("SELECT body, created FROM page_content") == [("body", "2026-03-01 12:00:00")]


def test_plain_callable_accepted(sqlite_db):
    assert ConnectionExecutor(sqlite_db).run(lambda _previous, _scope: "ok") == "ok"


def test_failure_becomes_infrastructure_error(sqlite_db):
    def broken(_previous, scope):
        scope.cursor.execute("SELECT * FROM missing_table")

    with pytest.raises(InfrastructureError) as exc_info:
        ConnectionExecutor(sqlite_db).run(broken)
    assert exc_info.value.__cause__ is not None
    assert sqlite_db.acquired == sqlite_db.released == 1


def test_domain_error_passes_through(sqlite_db):
    def missing(_previous, _scope):
        raise NotFoundError("Blog 3 not found")

    with pytest.raises(NotFoundError):
        ConnectionExecutor(sqlite_db).run(missing)


def test_expired_deadline_rejected_before_connecting(sqlite_db, monkeypatch):
    monkeypatch.setattr(request_context.time, "monotonic", lambda: 100.0)
    context = RequestContext(origin="10.0.0.1", deadline=1.0)

    with pytest.raises(DeadlineExceededError):
        ConnectionExecutor(sqlite_db).run(lambda _previous, _scope: None, context)
    assert sqlite_db.acquired == 0


def test_store_failure_after_deadline_is_deadline_exceeded(sqlite_db, monkeypatch):
    now = [0.0]
    monkeypatch.setattr(request_context.time, "monotonic", lambda: now[0])
    context = RequestContext(origin="10.0.0.1", deadline=5.0)
    lock_wait = InfrastructureError("Lock wait timeout exceeded")

    def blocked(_previous, _scope):
        now[0] = 6.0
        raise lock_wait

    with pytest.raises(DeadlineExceededError) as exc_info:
        ConnectionExecutor(sqlite_db).run(blocked, context)
    assert exc_info.value.__cause__ is lock_wait


def test_not_found_after_deadline_stays_not_found(sqlite_db, monkeypatch):
    now = [0.0]
    monkeypatch.setattr(request_context.time, "monotonic", lambda: now[0])
    context = RequestContext(origin="10.0.0.1", deadline=5.0)

    def missing(_previous, _scope):
        now[0] = 6.0
        raise NotFoundError("Blog 3 not found")

    with pytest.raises(NotFoundError):
        ConnectionExecutor(sqlite_db).run(missing, context)
