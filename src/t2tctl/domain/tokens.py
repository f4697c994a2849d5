"""Title grammar: split a task title into description, dates and modifiers.

Syntax (with the default ``/`` delimiter)::

    Buy a newspaper //next tuesday ///next monday ////weekly /top /errand

- The modifier region starts at the first delimiter preceded by a space,
  so ``before/during/after`` is never split.
- ``//`` due date, ``///`` start date, ``////`` repeat.  Each value runs
  to the next delimiter; an empty value means "present but blank".
- Each remaining ``/word`` is a modifier.
- Without ``//``, the first modifier that reads as a date becomes the due
  date, so a single mistyped ``/tomorrow`` still works.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

DUE_DATE_DELIMITER_COUNT = 2
START_DATE_DELIMITER_COUNT = 3
REPEAT_DELIMITER_COUNT = 4


@dataclass(frozen=True)
class TaskTokens:
    """Parsed title.  ``None`` means the marker was absent."""

    description: str
    due_date: str | None = None
    start_date: str | None = None
    repeat: str | None = None
    modifiers: tuple[str, ...] = field(default_factory=tuple)


def find_and_remove(source: str, sequence: str, delimiter: str) -> tuple[str, str | None]:
    """Cut *sequence* and the value following it out of *source*.

    Returns ``(remainder, value)``.  The value runs up to the next single
    delimiter or the end of the string.  When *sequence* is absent the
    source comes back unchanged with a None value.

    Examples:
        >>> find_and_remove("/a //b /c", "//", "/")
        ('/a /c', 'b')
        >>> find_and_remove("/a //", "//", "/")
        ('/a', '')
        >>> find_and_remove("/a", "//", "/")
        ('/a', None)
    """
    index = source.find(sequence)
    if index == -1:
        return source, None

    before = source[:index].strip()
    after = source[index + len(sequence) :]
    next_delimiter = after.find(delimiter)
    if next_delimiter == -1:
        return before, after.strip()
    return f"{before} {after[next_delimiter:]}", after[:next_delimiter].strip()


def tokenize(
    title: str,
    *,
    delimiter: str = "/",
    is_date: Callable[[str], bool] | None = None,
) -> TaskTokens:
    """Parse *title* into :class:`TaskTokens`.

    Args:
        title: Raw task title.
        delimiter: Single character that introduces each modifier.
        is_date: Predicate used for the single-delimiter due-date
            fallback.  Without it, no fallback is attempted.
    """
    start = title.find(" " + delimiter)
    if start == -1:
        return TaskTokens(description=title.strip())
    start += 1

    description = title[:start].strip()
    remainder = title[start:].strip()

    # Longest sequences first: "//" is a prefix of "///" and "////".
    remainder, repeat = find_and_remove(remainder, delimiter * REPEAT_DELIMITER_COUNT, delimiter)
    remainder, start_date = find_and_remove(
        remainder, delimiter * START_DATE_DELIMITER_COUNT, delimiter
    )
    remainder, due_date = find_and_remove(remainder, delimiter * DUE_DATE_DELIMITER_COUNT, delimiter)

    modifiers = [piece.strip() for piece in remainder.split(delimiter) if piece.strip()]

    if due_date is None and is_date is not None:
        for index, modifier in enumerate(modifiers):
            if is_date(modifier):
                due_date = modifier
                modifiers = modifiers[:index] + modifiers[index + 1 :]
                break

    return TaskTokens(
        description=description,
        due_date=due_date,
        start_date=start_date,
        repeat=repeat,
        modifiers=tuple(modifiers),
    )
