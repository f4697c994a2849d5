"""Typed payload contracts for service results.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``modifiers`` vs ``tags``)
fail fast in tests.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class TokensData(BaseModel):
    """Payload contract for ``NormalizeService.tokenize``."""

    title: str
    description: str
    due_date: str | None
    start_date: str | None
    repeat: str | None
    modifiers: list[str]


class DateData(BaseModel):
    """Payload contract for ``NormalizeService.resolve_date``."""

    text: str
    timestamp: int
    date: str


class PseudoDateData(BaseModel):
    """Payload contract for ``NormalizeService.pseudo_date``."""

    status: str
    context: str | None
    timestamp: int
    date: str


class TaskData(BaseModel):
    """One task as reported back to the caller."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: str
    note: str
    priority: str
    starred: bool
    due_date: int
    start_date: int
    repeat: str
    context: int
    folder: int
    tags: list[str]
    status: str


class NormalizeData(BaseModel):
    """Payload contract for ``NormalizeService.normalize_title``."""

    changed: bool
    task: TaskData


class SyncItem(BaseModel):
    """One changed task in a cycle."""

    id: int
    title: str


class SyncData(BaseModel):
    """Payload contract for ``CycleService.run_once``."""

    source: str
    inspected: int
    modified: int
    pushed: int
    dry_run: bool
    items: list[SyncItem]
