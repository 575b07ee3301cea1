"""
PassGuard Shared Data Models
=============================

Report-level pydantic models. A :class:`CheckResult` collects the
:class:`Finding` objects produced for one or more password candidates
and is what the JSON report serialises. Candidates appear only in masked
form.

References:
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Severity(str, Enum):
    """How serious a finding is.

    ``CRITICAL`` is a dictionary hit, ``HIGH`` any other violated rule;
    the remaining levels describe the strength band of compliant
    candidates.
    """

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"


class Finding(BaseModel):
    """One observation about a candidate (a violated rule, or its strength)."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    severity: Severity
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(..., min_length=1)
    evidence: str = ""
    recommendation: str = ""
    rule_id: Optional[str] = None

    @field_validator("evidence", mode="before")
    @classmethod
    def _evidence_as_text(cls, value: Any) -> str:
        # Structured evidence is stored as compact JSON text.
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False, sort_keys=True, default=str)
        return value if isinstance(value, str) else str(value)


class CheckResult(BaseModel):
    """Findings of one ``check`` or ``batch`` run.

    Attributes:
        tool_name: Emitting tool, ``"passguard"``.
        target: Masked candidate, or the input file name for batch runs.
        start_time: UTC creation time.
        end_time: UTC time :meth:`finalize` was called.
        findings: Findings in emission order.
        summary: One-line human summary.
        metadata: Extra data, e.g. the dumped strength reports.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    tool_name: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    start_time: datetime = Field(default_factory=_utcnow)
    end_time: Optional[datetime] = None
    findings: list[Finding] = Field(default_factory=list)
    summary: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def severity_counts(self) -> dict[str, int]:
        """Findings per severity; every level is present, possibly with 0."""
        seen = Counter(f.severity for f in self.findings)
        return {level.value: seen[level] for level in Severity}

    @property
    def finding_count(self) -> int:
        return len(self.findings)

    def add_finding(self, finding: Finding) -> None:
        self.findings.append(finding)

    def finalize(self, summary: Optional[str] = None) -> CheckResult:
        """Stamp ``end_time`` and set the summary; returns ``self``."""
        self.end_time = _utcnow()
        if summary is None:
            counted = ", ".join(
                f"{level}: {n}" for level, n in self.severity_counts.items() if n
            )
            summary = f"{self.finding_count} finding(s)" + (f" ({counted})" if counted else "")
        self.summary = summary
        return self
