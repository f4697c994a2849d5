"""Task record, priority/status enums, and the per-status attribute table.

Numeric values of :class:`Priority` and :class:`Status` are the ones the
remote task service uses on the wire, so they must never be renumbered.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Seconds since 1 January 1970 GMT. 0 means "blank".
Timestamp = int

BLANK: Timestamp = 0

TAG_SEPARATOR = ","


class Priority(IntEnum):
    """Task priorities, lowest first."""

    NEGATIVE = -1
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    TOP = 3


class Status(IntEnum):
    """Task statuses as numbered by the remote service."""

    NONE = 0
    NEXT_ACTION = 1
    ACTIVE = 2
    PLANNING = 3
    DELEGATED = 4
    WAITING = 5
    HOLD = 6
    POSTPONED = 7
    SOMEDAY = 8
    CANCELED = 9
    REFERENCE = 10


class OverrideState(StrEnum):
    """Whether the due date is pinned by the user for the current pass.

    UNSET defers to the banner stored in the note.
    """

    OVERRIDE = "override"
    CLEAR = "clear"
    UNSET = "unset"


@dataclass(frozen=True)
class StatusTraits:
    """Attributes attached to each status."""

    pseudo_day: int
    shortcut: str | None = None


STATUS_TRAITS: dict[Status, StatusTraits] = {
    Status.NONE: StatusTraits(1),
    Status.NEXT_ACTION: StatusTraits(1, "next"),
    Status.ACTIVE: StatusTraits(7),
    Status.PLANNING: StatusTraits(14, "plan"),
    Status.DELEGATED: StatusTraits(21, "delegate"),
    Status.WAITING: StatusTraits(21),
    Status.HOLD: StatusTraits(21),
    Status.POSTPONED: StatusTraits(21),
    Status.SOMEDAY: StatusTraits(28),
    Status.CANCELED: StatusTraits(28),
    Status.REFERENCE: StatusTraits(28, "ref"),
}

DEFAULT_STATUS = Status.NEXT_ACTION
FUTURE_STATUS = Status.HOLD


def _build_status_keywords() -> dict[str, Status]:
    index: dict[str, Status] = {}
    for status in Status:
        shortcut = STATUS_TRAITS[status].shortcut
        if shortcut is not None:
            index.setdefault(shortcut.lower(), status)
        index.setdefault(status.name.lower(), status)
    return index


_STATUS_KEYWORDS = _build_status_keywords()
_PRIORITY_KEYWORDS = {p.name.lower(): p for p in Priority}
_PRIORITY_VALUES = frozenset(p.value for p in Priority)
_STATUS_VALUES = frozenset(s.value for s in Status)


def status_from_keyword(word: str) -> Status | None:
    """Match *word* against status names and shortcuts, ignoring case.

    Examples:
        >>> status_from_keyword("plan")
        <Status.PLANNING: 3>
        >>> status_from_keyword("Next_Action")
        <Status.NEXT_ACTION: 1>
        >>> status_from_keyword("errand") is None
        True
    """
    return _STATUS_KEYWORDS.get(word.lower())


def priority_from_keyword(word: str) -> Priority | None:
    """Match *word* against priority names, ignoring case."""
    return _PRIORITY_KEYWORDS.get(word.lower())


def distinct_tags(tags: Iterable[str]) -> list[str]:
    """Trimmed, non-blank *tags* with case-insensitive duplicates dropped.

    The first spelling of each tag wins.
    """
    kept: list[str] = []
    seen: set[str] = set()
    for raw in tags:
        tag = raw.strip()
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            kept.append(tag)
    return kept


def split_tags(raw: str) -> list[str]:
    """Split the service's comma-separated tag string into distinct tags."""
    return distinct_tags(raw.split(TAG_SEPARATOR))


class Context(BaseModel):
    """A task context or folder (both share this shape)."""

    model_config = {"frozen": True}

    id: int
    name: str

    @property
    def name_without_prefix(self) -> str:
        """Name with the leading code segment removed.

        ``"p3. Geek"`` becomes ``"Geek"``; a name without a space, or
        starting with one, is returned unchanged.
        """
        index = self.name.find(" ")
        if index <= 0:
            return self.name
        return self.name[index + 1 :].strip()


class Task(BaseModel):
    """A task as held by the remote service.

    Context and folder are references by id; 0 means none.
    """

    model_config = {"frozen": True}

    id: int = 0
    title: str = ""
    note: str = ""
    priority: Priority = Priority.LOW
    starred: bool = False
    due_date: Timestamp = BLANK
    start_date: Timestamp = BLANK
    repeat: str = ""
    context: int = 0
    folder: int = 0
    tags: list[str] = Field(default_factory=list)
    status: Status = Status.NONE
    children: int = Field(default=0, ge=0)

    @field_validator("title", "note", "repeat", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: Any) -> Any:
        if isinstance(value, int) and value not in _PRIORITY_VALUES:
            return Priority.NEGATIVE
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Any:
        if isinstance(value, int) and value not in _STATUS_VALUES:
            return Status.NONE
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return split_tags(value)
        if isinstance(value, (list, tuple)) and all(isinstance(tag, str) for tag in value):
            return distinct_tags(value)
        return value

    @property
    def tag_string(self) -> str:
        """Tags rendered the way the service stores them."""
        return ", ".join(self.tags)

    def has_tag(self, label: str) -> bool:
        """Whether *label* is already a tag, ignoring case."""
        wanted = label.strip().lower()
        return any(tag.strip().lower() == wanted for tag in self.tags)
