"""BaseService: shared foundation for t2tctl services.

Every service is built from the engine conventions and an optional
clock.  Services own no I/O of their own; task sources are passed to the
operations that need them.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from t2tctl.domain.conventions import Conventions
from t2tctl.domain.rules import RuleEngine


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class NormalizeService(BaseService):
            def tokenize(self, title: str) -> ServiceResult:
                tokens = self._engine.tokenize(title)
                ...
    """

    def __init__(
        self,
        conventions: Conventions | None = None,
        *,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._engine = RuleEngine(conventions, clock=clock)

    @property
    def engine(self) -> RuleEngine:
        return self._engine
