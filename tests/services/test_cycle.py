"""Tests for CycleService against an in-memory task source."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

import pytest

from t2tctl.domain.catalog import ContextCatalog
from t2tctl.domain.types import Context, Status, Task
from t2tctl.infrastructure.source import TaskSourceError
from t2tctl.services.cycle import CycleService


class MemorySource:
    """TaskSource holding everything in memory."""

    def __init__(
        self,
        tasks: list[Task],
        *,
        reachable: bool = True,
        fail_fetch: bool = False,
        fail_push: bool = False,
        accept: int | None = None,
    ) -> None:
        self.tasks = tasks
        self.reachable = reachable
        self.fail_fetch = fail_fetch
        self.fail_push = fail_push
        self.accept = accept
        self.pushed: list[Task] = []

    @property
    def name(self) -> str:
        return "memory"

    def ping(self) -> bool:
        return self.reachable

    def fetch_contexts(self) -> list[Context]:
        return [Context(id=1, name="Work"), Context(id=3, name="Errands")]

    def fetch_folders(self) -> list[Context]:
        return [Context(id=10, name="w Work")]

    def fetch_tasks(self) -> list[Task]:
        if self.fail_fetch:
            raise TaskSourceError("fetch failed")
        return list(self.tasks)

    def push_tasks(self, tasks: Sequence[Task]) -> int:
        if self.fail_push:
            raise TaskSourceError("push failed")
        self.pushed.extend(tasks)
        return len(tasks) if self.accept is None else self.accept


@pytest.fixture
def svc(clock: Callable[[], date]) -> CycleService:
    return CycleService(clock=clock)


class TestNormalizeTasks:
    def test_returns_only_changed(
        self, svc: CycleService, contexts: ContextCatalog, folders: ContextCatalog
    ) -> None:
        stable = svc.engine.normalize(Task(id=1, title="Plain")).task
        changed = svc.normalize_tasks(
            [stable, Task(id=2, title="Call Bob /errand")], contexts, folders
        )
        assert [t.id for t in changed] == [2]
        assert changed[0].context == 3


class TestRunOnce:
    def test_pushes_changed_tasks(self, svc: CycleService) -> None:
        source = MemorySource([Task(id=1, title="Send invoice /work"), Task(id=2, title="x")])
        result = svc.run_once(source)
        assert result.ok
        assert result.op == "sync"
        assert result.data["source"] == "memory"
        assert result.data["inspected"] == 2
        assert result.data["modified"] == 2
        assert result.data["pushed"] == 2
        assert result.data["dry_run"] is False
        first = source.pushed[0]
        assert (first.context, first.folder) == (1, 10)

    def test_second_cycle_pushes_nothing(self, svc: CycleService) -> None:
        source = MemorySource([Task(id=1, title="wf Bob /work /phone")])
        svc.run_once(source)
        again = MemorySource(source.pushed)
        result = svc.run_once(again)
        assert result.data["modified"] == 0
        assert again.pushed == []

    def test_dry_run(self, svc: CycleService) -> None:
        source = MemorySource([Task(id=5, title="Call Bob /errand")])
        result = svc.run_once(source, dry_run=True)
        assert result.ok
        assert result.data["modified"] == 1
        assert result.data["pushed"] == 0
        assert result.data["items"] == [{"id": 5, "title": "Call Bob"}]
        assert source.pushed == []

    def test_unreachable(self, svc: CycleService) -> None:
        result = svc.run_once(MemorySource([], reachable=False))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SOURCE_UNAVAILABLE"
        assert result.error.detail == {"source": "memory"}

    def test_fetch_error(self, svc: CycleService) -> None:
        result = svc.run_once(MemorySource([], fail_fetch=True))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SOURCE_ERROR"
        assert result.error.message == "fetch failed"

    def test_push_error(self, svc: CycleService) -> None:
        result = svc.run_once(MemorySource([Task(id=1, title="x /top")], fail_push=True))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SOURCE_ERROR"

    def test_partial_push_warns(self, svc: CycleService) -> None:
        tasks = [Task(id=1, title="a /top"), Task(id=2, title="b /top")]
        result = svc.run_once(MemorySource(tasks, accept=1))
        assert result.ok
        assert result.data["pushed"] == 1
        assert result.warnings == ["Source accepted 1 of 2 modified tasks"]

    def test_nothing_to_do(self, svc: CycleService) -> None:
        stable = svc.engine.normalize(Task(id=1, title="Plain", status=Status.NEXT_ACTION)).task
        source = MemorySource([stable])
        result = svc.run_once(source)
        assert result.ok
        assert result.data["modified"] == 0
        assert result.warnings == []
