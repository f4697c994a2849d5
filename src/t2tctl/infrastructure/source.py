"""TaskSource: the boundary to wherever tasks live.

The remote task service, its authentication and its wire format are
outside this package.  Anything that can hand over contexts, folders and
tasks, and accept changed tasks back, can drive a normalization cycle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from t2tctl.domain.types import Context, Task


class TaskSourceError(Exception):
    """Raised by a TaskSource when it cannot read or write tasks."""


class TaskSource(Protocol):
    """Supplier of one user's tasks and catalogs."""

    @property
    def name(self) -> str: ...

    def ping(self) -> bool:
        """Whether the source is reachable right now."""
        ...

    def fetch_contexts(self) -> list[Context]: ...

    def fetch_folders(self) -> list[Context]: ...

    def fetch_tasks(self) -> list[Task]: ...

    def push_tasks(self, tasks: Sequence[Task]) -> int:
        """Store changed tasks and return how many were accepted."""
        ...
