"""CycleService: one fetch, normalize, push pass over a task source.

Only tasks the rule engine actually changed are pushed back.  Scheduling
repeated cycles is left to the caller (cron, a service manager, ...).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from t2tctl.domain.catalog import ContextCatalog
from t2tctl.domain.types import Task
from t2tctl.infrastructure.source import TaskSource, TaskSourceError
from t2tctl.services.base import BaseService
from t2tctl.services.contracts import SyncData, dump_validated
from t2tctl.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class CycleService(BaseService):
    """Run normalization cycles against a :class:`TaskSource`."""

    def normalize_tasks(
        self,
        tasks: Iterable[Task],
        contexts: ContextCatalog | None = None,
        folders: ContextCatalog | None = None,
    ) -> list[Task]:
        """Normalize *tasks* and return only the ones that changed."""
        changed: list[Task] = []
        for task in tasks:
            outcome = self._engine.normalize(task, contexts, folders)
            if outcome.changed:
                changed.append(outcome.task)
        return changed

    def run_once(self, source: TaskSource, *, dry_run: bool = False) -> ServiceResult:
        """Fetch every task from *source*, normalize, and push the changes.

        With *dry_run* the changed tasks are reported but not pushed.
        """
        op = "sync"
        if not source.ping():
            logger.warning("Task source %s is unavailable", source.name)
            return ServiceResult.failure(
                op,
                ErrorCode.SOURCE_UNAVAILABLE,
                f"Task source is unavailable: {source.name}",
                source=source.name,
            )

        try:
            contexts = ContextCatalog(source.fetch_contexts())
            folders = ContextCatalog(source.fetch_folders())
            tasks = source.fetch_tasks()
        except TaskSourceError as exc:
            logger.warning("Fetching from %s failed: %s", source.name, exc)
            return ServiceResult.failure(op, ErrorCode.SOURCE_ERROR, str(exc), source=source.name)

        logger.info("Tasks to inspect: %d", len(tasks))
        changed = self.normalize_tasks(tasks, contexts, folders)
        logger.info("Tasks modified: %d", len(changed))

        warnings: list[str] = []
        pushed = 0
        if changed and not dry_run:
            try:
                pushed = source.push_tasks(changed)
            except TaskSourceError as exc:
                logger.warning("Pushing to %s failed: %s", source.name, exc)
                return ServiceResult.failure(
                    op, ErrorCode.SOURCE_ERROR, str(exc), source=source.name
                )
            if pushed < len(changed):
                warnings.append(f"Source accepted {pushed} of {len(changed)} modified tasks")

        data = dump_validated(
            SyncData,
            {
                "source": source.name,
                "inspected": len(tasks),
                "modified": len(changed),
                "pushed": pushed,
                "dry_run": dry_run,
                "items": [{"id": task.id, "title": task.title} for task in changed],
            },
        )
        return ServiceResult.success(op, data, warnings=warnings)
