"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import Any

from t2tctl.domain.dates import timestamp_date
from t2tctl.domain.types import BLANK, Task, Timestamp


def iso_date(value: Timestamp) -> str | None:
    """GMT calendar date of *value* as YYYY-MM-DD, None when blank."""
    if value == BLANK:
        return None
    return timestamp_date(value).isoformat()


def task_payload(task: Task) -> dict[str, Any]:
    """Flatten a task for result payloads, with readable enums and dates."""
    payload = task.model_dump(mode="json")
    payload["priority"] = task.priority.name.lower()
    payload["status"] = task.status.name.lower()
    payload["due"] = iso_date(task.due_date)
    payload["start"] = iso_date(task.start_date)
    return payload
