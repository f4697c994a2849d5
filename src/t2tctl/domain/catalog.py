"""ContextCatalog: read-only lookups over one user's contexts or folders.

The same class serves both contexts and folders.  Lookups that scan
return the first match in the order the catalog was built from, so
results are deterministic for a given input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from t2tctl.domain.types import Context

CODE_SEPARATOR = " - "


class ContextCatalog:
    """Immutable collection of :class:`Context` values."""

    def __init__(self, contexts: Iterable[Context] = ()) -> None:
        self._contexts: tuple[Context, ...] = tuple(contexts)
        self._by_id: dict[int, Context] = {}
        self._by_name: dict[str, Context] = {}
        for context in self._contexts:
            self._by_id.setdefault(context.id, context)
            self._by_name.setdefault(context.name, context)

    def __iter__(self) -> Iterator[Context]:
        return iter(self._contexts)

    def __len__(self) -> int:
        return len(self._contexts)

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._contexts)
        return f"ContextCatalog([{names}])"

    def find_by_id(self, context_id: int) -> Context | None:
        return self._by_id.get(context_id)

    def find_by_name(self, name: str) -> Context | None:
        return self._by_name.get(name)

    def find_by_name_match_start(self, name: str) -> Context | None:
        """First context whose name starts with *name*, ignoring case.

        Only the first ``len(name)`` characters of each candidate are
        compared, so ``"err"`` finds ``"Errands"``.
        """
        wanted = name.lower()
        for context in self._contexts:
            if context.name[: len(name)].lower() == wanted:
                return context
        return None

    def find_by_name_or_unprefixed(self, name: str) -> Context | None:
        """First context whose full or prefix-stripped name equals *name*, ignoring case."""
        wanted = name.lower()
        for context in self._contexts:
            if context.name.lower() == wanted:
                return context
            if context.name_without_prefix.lower() == wanted:
                return context
        return None

    def find_by_code(self, code: str) -> Context | None:
        """First context named ``"<code> - ..."``, e.g. ``"p6 - Geek"`` for ``"p6"``."""
        prefix = code + CODE_SEPARATOR
        for context in self._contexts:
            if context.name.startswith(prefix):
                return context
        return None
