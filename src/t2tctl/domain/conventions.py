"""Naming conventions the rule engine depends on.

Every literal the engine matches against (delimiter, keywords, context
names, title prefixes, note markers) lives here with the values the
workflow has always used baked in as defaults.  The config layer embeds
these models as ``t2tctl.toml`` sections, so a deployment overrides only
what differs.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from t2tctl.domain.types import (
    DEFAULT_STATUS,
    FUTURE_STATUS,
    STATUS_TRAITS,
    Status,
    status_from_keyword,
)


class TokenConventions(BaseModel):
    """[tokens] section."""

    model_config = {"frozen": True}

    delimiter: str = Field(default="/", min_length=1, max_length=1)


class DateConventions(BaseModel):
    """[dates] section."""

    model_config = {"frozen": True}

    # Day-first short formats, then ISO; tried in order.
    formats: list[str] = Field(default_factory=lambda: ["%d/%m/%y", "%d/%m/%Y", "%Y-%m-%d"])
    default_month_offset: int = 3
    work_month_offset: int = 4
    notes_month_offset: int = 5
    archive_threshold_days: int = 300


class ContextConventions(BaseModel):
    """[contexts] section."""

    model_config = {"frozen": True}

    work: str = "Work"
    personal: str = "Personal"
    notes: str = "x Notes"
    default_work_folder: str = "w Work"
    default_personal_folder: str = "p Personal"


class KeywordConventions(BaseModel):
    """[keywords] section."""

    model_config = {"frozen": True}

    star: str = "star"
    no_star: str = "nostar"
    no_context: str = "nocontext"
    no_folder: str = "nofolder"
    no_tag: str = "notag"
    no_due_date: str = "nod"


class MarkerConventions(BaseModel):
    """[markers] section."""

    model_config = {"frozen": True}

    reminder_prefix: str = "Reminder: "
    waiting_short: str = "wf "
    waiting_long: str = "Waiting for"
    reference_prefix: str = "."
    project_tag: str = "_project"
    project_note_markers: list[str] = Field(
        default_factory=lambda: [
            "---- Task Type: Project ----",
            "---- Task Type: Checklist ----",
        ]
    )
    banner_sentinel: str = "~~"
    max_note_length: int = 600


def _status_value(value: Any) -> Any:
    if isinstance(value, str):
        status = status_from_keyword(value)
        if status is None:
            msg = f"Unknown status {value!r}"
            raise ValueError(msg)
        return status
    return value


class StatusConventions(BaseModel):
    """[status] section.

    ``pseudo_days`` overrides the day-of-month for individual statuses,
    keyed by status name or shortcut (``waiting = 20``).
    """

    model_config = {"frozen": True}

    default: Status = DEFAULT_STATUS
    future: Status = FUTURE_STATUS
    pseudo_days: dict[str, int] = Field(default_factory=dict)

    @field_validator("default", "future", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Any:
        return _status_value(value)

    @field_validator("pseudo_days")
    @classmethod
    def _known_statuses(cls, value: dict[str, int]) -> dict[str, int]:
        for key in value:
            _status_value(key)
        return value

    def pseudo_day(self, status: Status) -> int:
        """Day-of-month used for *status* pseudo-dates."""
        for key, day in self.pseudo_days.items():
            if status_from_keyword(key) == status:
                return day
        return STATUS_TRAITS[status].pseudo_day


class Conventions(BaseModel):
    """Every convention the core consumes, bundled."""

    model_config = {"frozen": True}

    tokens: TokenConventions = Field(default_factory=TokenConventions)
    dates: DateConventions = Field(default_factory=DateConventions)
    contexts: ContextConventions = Field(default_factory=ContextConventions)
    keywords: KeywordConventions = Field(default_factory=KeywordConventions)
    markers: MarkerConventions = Field(default_factory=MarkerConventions)
    status: StatusConventions = Field(default_factory=StatusConventions)
