"""Shared pytest fixtures and test helpers for t2tctl tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from t2tctl.domain.catalog import ContextCatalog
from t2tctl.domain.dates import DateResolver, noon_timestamp
from t2tctl.domain.rules import RuleEngine
from t2tctl.domain.types import Context, Task, Timestamp

# A Wednesday.
TODAY = date(2026, 10, 21)


def ts(year: int, month: int, day: int) -> Timestamp:
    """Noon-GMT timestamp for a calendar date."""
    return noon_timestamp(date(year, month, day))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> Callable[[], date]:
    """Clock pinned to :data:`TODAY`."""
    return lambda: TODAY


@pytest.fixture
def resolver(clock: Callable[[], date]) -> DateResolver:
    return DateResolver(clock=clock)


@pytest.fixture
def engine(clock: Callable[[], date]) -> RuleEngine:
    """Rule engine with default conventions and the pinned clock."""
    return RuleEngine(clock=clock)


@pytest.fixture
def contexts() -> ContextCatalog:
    return ContextCatalog(
        [
            Context(id=1, name="Work"),
            Context(id=2, name="Personal"),
            Context(id=3, name="Errands"),
            Context(id=4, name="x Notes"),
            Context(id=5, name="Home"),
        ]
    )


@pytest.fixture
def folders() -> ContextCatalog:
    return ContextCatalog(
        [
            Context(id=10, name="w Work"),
            Context(id=11, name="p Personal"),
            Context(id=12, name="p3. Geek"),
            Context(id=13, name="w2 Reports"),
        ]
    )


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with the clock pinned and no config.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("T2TCTL_CONFIG", raising=False)
    monkeypatch.setenv("T2TCTL_TODAY", TODAY.isoformat())


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_snapshot(path: Path, *, tasks: list[dict[str, Any]], **extra: Any) -> Path:
    """Write a snapshot file with the standard catalogs plus *tasks*."""
    payload: dict[str, Any] = {
        "contexts": [
            {"id": 1, "name": "Work"},
            {"id": 2, "name": "Personal"},
            {"id": 3, "name": "Errands"},
        ],
        "folders": [
            {"id": 10, "name": "w Work"},
            {"id": 11, "name": "p Personal"},
        ],
        "tasks": tasks,
    }
    payload.update(extra)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def normalize_twice(
    engine: RuleEngine,
    task: Task,
    contexts: ContextCatalog | None = None,
    folders: ContextCatalog | None = None,
) -> tuple[Task, bool]:
    """Normalize *task*, then normalize the result again.

    Returns the first result and the second pass's ``changed`` flag.
    """
    first = engine.normalize(task, contexts, folders)
    second = engine.normalize(first.task, contexts, folders)
    return first.task, second.changed
