"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``T2TCTL_*`` prefix
  3. TOML file: ``t2tctl.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses ``find_config`` and ``read_toml`` from
:mod:`t2tctl.config.discovery`.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from t2tctl.config.discovery import ConfigError, find_config, read_toml
from t2tctl.domain.conventions import (
    ContextConventions,
    Conventions,
    DateConventions,
    KeywordConventions,
    MarkerConventions,
    StatusConventions,
    TokenConventions,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``t2tctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_toml(toml_path)
            except ConfigError as exc:
                raise click.ClickException(str(exc)) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class T2tSettings(BaseSettings):
    """Unified settings for the t2tctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored in
    ``click.Context.obj`` at the CLI root level.

    Attributes:
        config_path: The TOML file in use, or None when running on defaults.
        today: Pins the clock to a fixed local date (``T2TCTL_TODAY``);
            None means the real clock.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "T2TCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    today: date | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    tokens: TokenConventions = Field(default_factory=TokenConventions)
    dates: DateConventions = Field(default_factory=DateConventions)
    contexts: ContextConventions = Field(default_factory=ContextConventions)
    keywords: KeywordConventions = Field(default_factory=KeywordConventions)
    markers: MarkerConventions = Field(default_factory=MarkerConventions)
    status: StatusConventions = Field(default_factory=StatusConventions)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> T2tSettings:
        """Construct settings from CLI invocation.

        Discovers ``t2tctl.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def conventions(self) -> Conventions:
        """Bundle the sections the rule engine consumes."""
        return Conventions(
            tokens=self.tokens,
            dates=self.dates,
            contexts=self.contexts,
            keywords=self.keywords,
            markers=self.markers,
            status=self.status,
        )

    def clock(self) -> Callable[[], date]:
        """Clock for date resolution: pinned when ``today`` is set."""
        if self.today is None:
            return date.today
        pinned = self.today
        return lambda: pinned
