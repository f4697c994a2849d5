"""Note banner: the marker line that carries state across passes.

The first line of a task note may hold a banner such as::

    ~~// /errand /phone

``~~`` opens it, ``//`` records that the due date is pinned by the user,
and each ``/tag`` mirrors an active tag.  Nothing else is persisted
between normalization passes, so the banner is how the engine remembers
an explicit due date.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from t2tctl.domain.tokens import DUE_DATE_DELIMITER_COUNT


class NoteBannerCodec:
    """Build banners and reconcile them into note text."""

    def __init__(
        self,
        *,
        delimiter: str = "/",
        sentinel: str = "~~",
        max_length: int = 600,
        line_separator: str = os.linesep,
    ) -> None:
        self.delimiter = delimiter
        self.sentinel = sentinel
        self.max_length = max_length
        self.line_separator = line_separator

    @property
    def banner_start(self) -> str:
        return self.sentinel + self.delimiter

    @property
    def override_marker(self) -> str:
        return self.sentinel + self.delimiter * DUE_DATE_DELIMITER_COUNT

    def has_override(self, note: str) -> bool:
        """Whether *note* records a pinned due date."""
        return self.override_marker in note.strip()

    def encode(self, *, overriding: bool, tags: Iterable[str]) -> str:
        """Banner for the given state, or ``""`` when there is nothing to record."""
        banner = self.sentinel
        if overriding:
            banner += self.delimiter * DUE_DATE_DELIMITER_COUNT
        for raw in tags:
            tag = raw.strip()
            if not tag:
                continue
            if len(banner) > len(self.sentinel):
                banner += " "
            banner += self.delimiter + tag
        return "" if banner == self.sentinel else banner

    def reconcile(self, note: str, banner: str) -> str:
        """Return *note* with *banner* as its first line.

        Old banner lines are dropped.  An empty banner removes any
        existing one.  The note comes back untouched when it already
        matches.
        """
        current = note.strip()
        start = self.banner_start

        if start not in current:
            if not banner:
                return note
            if not current:
                return self.truncate(banner)
            return self.truncate(f"{banner}{self.line_separator}{current}")

        lines = current.splitlines()
        if lines[0] == banner:
            return note

        rebuilt = banner
        for line in lines:
            if line.strip().startswith(start):
                continue
            if rebuilt:
                rebuilt += self.line_separator
            rebuilt += line
        return self.truncate(rebuilt)

    def truncate(self, note: str) -> str:
        """Hard-cut *note* to the maximum length the service accepts."""
        return note[: self.max_length]
