"""
Smali2Java Shared Data Models
==============================

Pydantic v2 models shared across the toolkit: diagnostic severity,
individual diagnostics, and the aggregated result of one run.

References:
    - SARIF v2.1.0 Specification (OASIS, 2020).
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import datetime as _dt
import json as _json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


# ========================== Enumerations ===================================


class Severity(str, Enum):
    """Diagnostic severity level.

    Attributes:
        ERROR:   A file could not be translated.
        WARNING: A file was translated but something looked off.
        INFO:    Informational observation.
    """

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def style(self) -> str:
        """Return the Rich style used when rendering this severity."""
        return {
            "ERROR": "bold red",
            "WARNING": "bold yellow",
            "INFO": "bold bright_blue",
        }[self.value]


# ========================== Core Models ====================================


class Diagnostic(BaseModel):
    """A single diagnostic produced during a run.

    Attributes:
        severity:    Severity of the diagnostic.
        title:       Short descriptive title.
        description: Detailed explanation.
        path:        Input file the diagnostic refers to, if any.
        evidence:    Raw data supporting the diagnostic (e.g. the offending line).
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="ignore",
    )

    severity: Severity = Field(..., description="Severity level")
    title: str = Field(..., min_length=1, max_length=256, description="Short title")
    description: str = Field(..., min_length=1, description="Detailed explanation")
    path: str = Field(default="", description="Related input file")
    evidence: str = Field(default="", description="Supporting evidence")

    @field_validator("evidence", mode="before")
    @classmethod
    def _coerce_evidence(cls, v: Any) -> str:
        """Auto-convert non-string evidence (dict, list) to JSON string."""
        if isinstance(v, str):
            return v
        if isinstance(v, (dict, list)):
            return _json.dumps(v, ensure_ascii=False, default=str)
        return str(v)


class RunResult(BaseModel):
    """Aggregated metadata of a single tool run.

    Attributes:
        tool_name:   Name of the tool that produced the run.
        target:      Root path that was processed.
        start_time:  UTC timestamp when the run started.
        end_time:    UTC timestamp when the run ended.
        diagnostics: Diagnostics collected during the run.
        summary:     Human-readable summary text.
        metadata:    Arbitrary extra metadata.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    tool_name: str = Field(..., min_length=1, description="Tool name")
    target: str = Field(..., min_length=1, description="Processed root path")
    start_time: _dt.datetime = Field(default_factory=_utcnow)
    end_time: Optional[_dt.datetime] = Field(default=None)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    summary: str = Field(default="")
    metadata: dict[str, Any] = Field(default_factory=dict)

    # ------------------------------------------------------------------ #
    #  Derived properties
    # ------------------------------------------------------------------ #

    @property
    def duration_seconds(self) -> float | None:
        """Elapsed run time in seconds, or ``None`` if *end_time* is unset."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def error_count(self) -> int:
        """Number of ERROR diagnostics."""
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    # ------------------------------------------------------------------ #
    #  Mutating helpers
    # ------------------------------------------------------------------ #

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic to the run."""
        self.diagnostics.append(diagnostic)

    def finalize(self, summary: str | None = None) -> RunResult:
        """Mark the run as complete by setting *end_time* and *summary*.

        Returns:
            ``self`` for fluent chaining.
        """
        self.end_time = _utcnow()
        if summary is not None:
            self.summary = summary
        else:
            self.summary = (
                f"Run complete. Diagnostics: {len(self.diagnostics)} "
                f"(errors: {self.error_count})"
            )
        return self
