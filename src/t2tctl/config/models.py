"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, t2tctl.toml only contains overrides.
A fresh setup needs no file at all; the defaults are the conventions the
workflow was built around.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from t2tctl.domain.conventions import (
    ContextConventions,
    Conventions,
    DateConventions,
    KeywordConventions,
    MarkerConventions,
    StatusConventions,
    TokenConventions,
)


class T2tConfig(BaseModel):
    """Root configuration composing all t2tctl.toml sections."""

    model_config = {"frozen": True}

    tokens: TokenConventions = Field(default_factory=TokenConventions)
    dates: DateConventions = Field(default_factory=DateConventions)
    contexts: ContextConventions = Field(default_factory=ContextConventions)
    keywords: KeywordConventions = Field(default_factory=KeywordConventions)
    markers: MarkerConventions = Field(default_factory=MarkerConventions)
    status: StatusConventions = Field(default_factory=StatusConventions)

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
