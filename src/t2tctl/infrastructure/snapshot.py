"""SnapshotSource: a TaskSource backed by a local JSON file.

File shape::

    {
      "contexts": [{"id": 1, "name": "Work"}],
      "folders":  [{"id": 7, "name": "w Work"}],
      "tasks":    [{"id": 42, "title": "Call Bob /work", "tags": "phone"}]
    }

Task fields follow :class:`~t2tctl.domain.types.Task`; ``tags`` may be a
list or the service's comma-separated string.  Pushed tasks replace the
stored task with the same id; the file is rewritten in place.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from t2tctl.domain.types import Context, Task
from t2tctl.infrastructure.source import TaskSourceError

logger = logging.getLogger(__name__)


class Snapshot(BaseModel):
    """On-disk snapshot schema."""

    contexts: list[Context] = Field(default_factory=list)
    folders: list[Context] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)


class SnapshotSource:
    """Read and write tasks in a JSON snapshot file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._snapshot: Snapshot | None = None

    @property
    def name(self) -> str:
        return str(self.path)

    def ping(self) -> bool:
        return self.path.is_file()

    def _load(self) -> Snapshot:
        if self._snapshot is None:
            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as exc:
                msg = f"Cannot read snapshot {self.path}: {exc}"
                raise TaskSourceError(msg) from exc
            try:
                self._snapshot = Snapshot.model_validate_json(raw)
            except ValidationError as exc:
                msg = f"Invalid snapshot {self.path}: {exc.error_count()} validation error(s)"
                raise TaskSourceError(msg) from exc
        return self._snapshot

    def fetch_contexts(self) -> list[Context]:
        return list(self._load().contexts)

    def fetch_folders(self) -> list[Context]:
        return list(self._load().folders)

    def fetch_tasks(self) -> list[Task]:
        return list(self._load().tasks)

    def push_tasks(self, tasks: Sequence[Task]) -> int:
        snapshot = self._load()
        replacements = {task.id: task for task in tasks}
        stored: list[Task] = []
        accepted = 0
        for task in snapshot.tasks:
            if task.id in replacements:
                stored.append(replacements[task.id])
                accepted += 1
            else:
                stored.append(task)

        updated = snapshot.model_copy(update={"tasks": stored})
        payload = updated.model_dump(mode="json")
        try:
            self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot write snapshot {self.path}: {exc}"
            raise TaskSourceError(msg) from exc

        self._snapshot = updated
        logger.debug("Wrote %d task(s) to %s", accepted, self.path)
        return accepted
