"""NormalizeService: title grammar, dates, and single-task normalization."""

from __future__ import annotations

from t2tctl.domain.dates import MAX_TIMESTAMP, is_representable
from t2tctl.domain.types import BLANK, Status, Task, Timestamp, status_from_keyword
from t2tctl.services._helpers import iso_date, task_payload
from t2tctl.services.base import BaseService
from t2tctl.services.contracts import (
    DateData,
    NormalizeData,
    PseudoDateData,
    TokensData,
    dump_validated,
)
from t2tctl.services.result import ErrorCode, ServiceResult


def _unknown_status(op: str, status: str) -> ServiceResult:
    return ServiceResult.failure(
        op, ErrorCode.UNKNOWN_STATUS, f"Unknown status: {status!r}", status=status
    )


class NormalizeService(BaseService):
    """Expose the rule engine's building blocks one operation at a time."""

    def tokenize(self, title: str) -> ServiceResult:
        """Split *title* into description, date tokens and modifiers."""
        tokens = self._engine.tokenize(title)
        data = dump_validated(
            TokensData,
            {
                "title": title,
                "description": tokens.description,
                "due_date": tokens.due_date,
                "start_date": tokens.start_date,
                "repeat": tokens.repeat,
                "modifiers": list(tokens.modifiers),
            },
        )
        return ServiceResult.success("tokenize", data)

    def resolve_date(self, text: str) -> ServiceResult:
        """Resolve a date keyword or short date."""
        value = self._engine.resolver.parse(text)
        if value is None:
            return ServiceResult.failure(
                "resolve_date", ErrorCode.INVALID_DATE, f"Not a date: {text!r}", text=text
            )
        data = dump_validated(DateData, {"text": text, "timestamp": value, "date": iso_date(value)})
        return ServiceResult.success("resolve_date", data)

    def pseudo_date(
        self,
        *,
        status: str | None = None,
        context: str | None = None,
    ) -> ServiceResult:
        """Pseudo due date for a status keyword and context name."""
        resolved = self._engine.conventions.status.default
        if status is not None:
            match = status_from_keyword(status)
            if match is None:
                return _unknown_status("pseudo_date", status)
            resolved = match

        value = self._engine.resolver.pseudo_date(context, resolved)
        data = dump_validated(
            PseudoDateData,
            {
                "status": resolved.name.lower(),
                "context": context,
                "timestamp": value,
                "date": iso_date(value),
            },
        )
        return ServiceResult.success("pseudo_date", data)

    def normalize_title(
        self,
        title: str,
        *,
        note: str = "",
        status: str | None = None,
        due_date: Timestamp = BLANK,
    ) -> ServiceResult:
        """Normalize an ad-hoc task built from *title*, without catalogs."""
        initial = Status.NONE
        if status is not None:
            match = status_from_keyword(status)
            if match is None:
                return _unknown_status("normalize", status)
            initial = match

        if not is_representable(due_date):
            return ServiceResult.failure(
                "normalize",
                ErrorCode.INVALID_DATE,
                f"Due date out of range: {due_date} (0 to {MAX_TIMESTAMP})",
                due_date=due_date,
            )

        task = Task(title=title, note=note, status=initial, due_date=due_date)
        outcome = self._engine.normalize(task)
        data = dump_validated(
            NormalizeData,
            {"changed": outcome.changed, "task": task_payload(outcome.task)},
        )
        return ServiceResult.success("normalize", data)
