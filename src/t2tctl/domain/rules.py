"""RuleEngine: normalize one task against the context and folder catalogs.

Rule order (later rules read what earlier ones set):

1.  Strip the calendar-reminder prefix from the title.
2.  Tokenize the title; the description becomes the title.
3.  Due date from ``//`` (pins the date), else infer the pin from the
    note banner for tasks that already carry a context, folder or status.
4.  Start date from ``///``.
5.  Repeat from ``////``.
6.  Modifiers: priority, no-due-date, star, context, status, folder, tags.
    Each category takes its first match out of the remaining list.
7.  Work/Personal context follows the folder's leading letter; a Work or
    Personal task without a folder gets the default one.
8.  Title prefixes drive Waiting and Reference statuses.
9.  Pseudo due date unless pinned or archived.
10. Banner reconciled into the note, note length capped.
11. ``changed`` compares the result with the supplied task.

INVARIANT: normalizing a result again, on the same day with the same
catalogs, reports ``changed=False``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any, TypeVar

from t2tctl.domain.banner import NoteBannerCodec
from t2tctl.domain.catalog import ContextCatalog
from t2tctl.domain.conventions import Conventions
from t2tctl.domain.dates import DateResolver
from t2tctl.domain.tokens import TaskTokens, tokenize
from t2tctl.domain.types import (
    OverrideState,
    Status,
    Task,
    priority_from_keyword,
    status_from_keyword,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class NormalizeOutcome:
    """Result of :meth:`RuleEngine.normalize`."""

    task: Task
    changed: bool


def take_first(
    modifiers: list[str], match: Callable[[str], T | None]
) -> tuple[T | None, list[str]]:
    """Find the first modifier *match* accepts.

    Returns the match and a fresh list without that entry.  When nothing
    matches, the original list is returned as-is.
    """
    for index, modifier in enumerate(modifiers):
        found = match(modifier)
        if found is not None:
            return found, modifiers[:index] + modifiers[index + 1 :]
    return None, modifiers


def take_literal(modifiers: list[str], literal: str) -> tuple[bool, list[str]]:
    """Remove the first exact occurrence of *literal*."""
    found, remaining = take_first(modifiers, lambda m: True if m == literal else None)
    return found is not None, remaining


class RuleEngine:
    """Apply the title grammar and inference rules to tasks.

    Args:
        conventions: Keywords, names and markers to match against.
        resolver: Date resolver; built from *conventions* and *clock*
            when omitted.
        clock: Zero-argument callable returning today's local date.
    """

    def __init__(
        self,
        conventions: Conventions | None = None,
        *,
        resolver: DateResolver | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.conventions = conventions or Conventions()
        self.resolver = resolver or DateResolver(self.conventions, clock=clock)
        self.codec = NoteBannerCodec(
            delimiter=self.conventions.tokens.delimiter,
            sentinel=self.conventions.markers.banner_sentinel,
            max_length=self.conventions.markers.max_note_length,
        )

    def tokenize(self, title: str) -> TaskTokens:
        return tokenize(
            title,
            delimiter=self.conventions.tokens.delimiter,
            is_date=self.resolver.is_date,
        )

    def normalize(
        self,
        task: Task,
        contexts: ContextCatalog | None = None,
        folders: ContextCatalog | None = None,
    ) -> NormalizeOutcome:
        """Normalize *task*; catalogs that are None disable their rules."""
        current = self._strip_reminder(task)

        tokens = self.tokenize(current.title)
        current = _update(current, title=tokens.description)

        current, override = self._apply_due_date(current, tokens.due_date)
        current = self._apply_start_date(current, tokens.start_date)
        current = self._apply_repeat(current, tokens.repeat)
        current, override = self._apply_modifiers(
            current, override, list(tokens.modifiers), contexts, folders
        )
        current = self._couple_context_and_folder(current, contexts, folders)
        current = self._apply_title_statuses(current)

        overriding = self._is_overriding(current, override)
        current = self._apply_pseudo_date(current, overriding, contexts)
        current = self._apply_banner(current, overriding)

        changed = current != task
        if changed:
            logger.debug("Normalized task %s: %r", task.id, current.title)
        return NormalizeOutcome(task=current, changed=changed)

    # --- Override state ---

    def _is_overriding(self, task: Task, override: OverrideState) -> bool:
        if override is OverrideState.UNSET:
            return self.codec.has_override(task.note)
        return override is OverrideState.OVERRIDE

    # --- Steps 1-5 ---

    def _strip_reminder(self, task: Task) -> Task:
        prefix = self.conventions.markers.reminder_prefix
        if prefix and task.title.startswith(prefix):
            return _update(task, title=task.title[len(prefix) :])
        return task

    def _apply_due_date(self, task: Task, token: str | None) -> tuple[Task, OverrideState]:
        if token is not None:
            due = self.resolver.parse(token)
            if due is not None and due != task.due_date:
                task = _update(task, due_date=due)
            return task, OverrideState.OVERRIDE

        # Only trust the stored due date for tasks that did not arrive
        # with every field at its placeholder value.
        if task.context > 0 or task.folder > 0 or task.status != Status.NONE:
            noted = self.codec.has_override(task.note)
            if task.due_date == 0 and noted:
                logger.debug("Due date cleared externally on task %s", task.id)
                return task, OverrideState.CLEAR
            if self.resolver.is_actual_date(task.due_date) and not noted:
                logger.debug("Due date set externally on task %s", task.id)
                return task, OverrideState.OVERRIDE
        return task, OverrideState.UNSET

    def _apply_start_date(self, task: Task, token: str | None) -> Task:
        if token is None:
            return task
        start = self.resolver.parse(token)
        if start is not None and start != task.start_date:
            return _update(task, start_date=start)
        return task

    def _apply_repeat(self, task: Task, token: str | None) -> Task:
        if token is not None and token != task.repeat:
            return _update(task, repeat=token)
        return task

    # --- Step 6 ---

    def _apply_modifiers(
        self,
        task: Task,
        override: OverrideState,
        modifiers: list[str],
        contexts: ContextCatalog | None,
        folders: ContextCatalog | None,
    ) -> tuple[Task, OverrideState]:
        keywords = self.conventions.keywords

        priority, modifiers = take_first(modifiers, priority_from_keyword)
        if priority is not None:
            task = _update(task, priority=priority)

        found, modifiers = take_literal(modifiers, keywords.no_due_date)
        if found and self._is_overriding(task, override):
            override = OverrideState.CLEAR

        found, modifiers = take_literal(modifiers, keywords.star)
        if found:
            task = _update(task, starred=True)
        found, modifiers = take_literal(modifiers, keywords.no_star)
        if found:
            task = _update(task, starred=False)

        if contexts is not None:
            found, modifiers = take_literal(modifiers, keywords.no_context)
            if found:
                if contexts.find_by_id(task.context) is not None:
                    task = _update(task, context=0)
            else:
                context, modifiers = take_first(modifiers, contexts.find_by_name_match_start)
                if context is not None:
                    task = _update(task, context=context.id)

        status, modifiers = take_first(modifiers, status_from_keyword)
        if status is not None:
            task = _update(task, status=status)
        if task.status == Status.NONE:
            task = _update(task, status=self.conventions.status.default)

        if folders is not None:
            found, modifiers = take_literal(modifiers, keywords.no_folder)
            if found:
                if folders.find_by_id(task.folder) is not None:
                    task = _update(task, folder=0)
            else:
                folder, modifiers = take_first(modifiers, folders.find_by_name_or_unprefixed)
                if folder is not None:
                    task = _update(task, folder=folder.id)

        found, modifiers = take_literal(modifiers, keywords.no_tag)
        if found:
            task = _update(task, tags=[])
        # Tags are added even after "notag" so a title can replace them all.
        for modifier in modifiers:
            if not task.has_tag(modifier):
                task = _update(task, tags=[*task.tags, modifier])

        return task, override

    # --- Step 7 ---

    def _couple_context_and_folder(
        self,
        task: Task,
        contexts: ContextCatalog | None,
        folders: ContextCatalog | None,
    ) -> Task:
        if contexts is None or folders is None:
            return task

        names = self.conventions.contexts
        work = contexts.find_by_name(names.work)
        personal = contexts.find_by_name(names.personal)

        for special in (work, personal):
            if special is None or not special.name:
                continue
            folder = folders.find_by_id(task.folder)
            if folder is None or not folder.name:
                continue
            if contexts.find_by_id(task.context) == special:
                continue
            if folder.name[0].upper() == special.name[0].upper():
                logger.debug("Folder %r implies context %r", folder.name, special.name)
                task = _update(task, context=special.id)

        for special, default_name in (
            (work, names.default_work_folder),
            (personal, names.default_personal_folder),
        ):
            if special is None or contexts.find_by_id(task.context) != special:
                continue
            if folders.find_by_id(task.folder) is not None:
                continue
            default_folder = folders.find_by_name(default_name)
            if default_folder is not None:
                task = _update(task, folder=default_folder.id)

        return task

    # --- Step 8 ---

    def _is_project(self, task: Task) -> bool:
        markers = self.conventions.markers
        note = task.note.strip()
        return (
            task.children > 0
            or markers.project_tag in task.tag_string
            or any(marker in note for marker in markers.project_note_markers)
        )

    def _apply_title_statuses(self, task: Task) -> Task:
        markers = self.conventions.markers
        future = self.conventions.status.future
        default = self.conventions.status.default

        if task.status != future and not self._is_project(task):
            waiting = task.title.startswith(markers.waiting_short) or task.title.startswith(
                markers.waiting_long
            )
            if waiting and task.status != Status.WAITING:
                task = _update(task, status=Status.WAITING)
            elif not waiting and task.status == Status.WAITING:
                task = _update(task, status=default)

        if task.status != future:
            reference = task.title.startswith(markers.reference_prefix)
            if reference and task.status != Status.REFERENCE:
                task = _update(task, status=Status.REFERENCE)
            elif not reference and task.status == Status.REFERENCE:
                task = _update(task, status=default)

        return task

    # --- Steps 9-10 ---

    def _apply_pseudo_date(
        self, task: Task, overriding: bool, contexts: ContextCatalog | None
    ) -> Task:
        if overriding or self.resolver.is_archived(task.due_date):
            return task
        context = contexts.find_by_id(task.context) if contexts is not None else None
        pseudo = self.resolver.pseudo_date(context.name if context else None, task.status)
        if pseudo != task.due_date:
            return _update(task, due_date=pseudo)
        return task

    def _apply_banner(self, task: Task, overriding: bool) -> Task:
        banner = self.codec.encode(overriding=overriding, tags=task.tags)
        note = self.codec.truncate(self.codec.reconcile(task.note, banner))
        if note != task.note:
            return _update(task, note=note)
        return task


def _update(task: Task, **changes: Any) -> Task:
    return task.model_copy(update=changes)
