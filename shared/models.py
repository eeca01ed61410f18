"""
CyberVault Data Models
=======================

Every engine operation is reported as a :class:`ScanResult`: a list of
:class:`Finding` objects (weak algorithm choices, digest mismatches,
password advice) plus the operation payload in ``metadata``. The console
and JSON layers render all commands through this one shape.

Findings must never carry key material, passwords or plaintext.
"""

from __future__ import annotations

import datetime as _dt
import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


class Severity(str, Enum):
    """How much a finding should worry the user, most severe first."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """0 for CRITICAL up to 4 for INFO."""
        return list(Severity).index(self)


class Finding(BaseModel):
    """One observation about an operation.

    ``evidence`` accepts a dict or list and stores it as a JSON string so
    the table renderer can show it verbatim.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    severity: Severity
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(..., min_length=1)
    evidence: str = ""
    recommendation: str = ""

    @field_validator("evidence", mode="before")
    @classmethod
    def _evidence_as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False, default=str)
        return str(value)


class ScanResult(BaseModel):
    """Outcome of one CyberVault command.

    Attributes:
        tool_name: Producing tool (``"vault"``).
        target: What was processed, e.g. ``"encrypt:AES"``, a file path or
            ``"[password]"``.
        start_time: UTC start.
        end_time: UTC end, set by :meth:`finalize`.
        findings: Observations, in the order they were added.
        summary: One-line description of the outcome.
        metadata: Operation payload, e.g. a dumped ``FileHashReport``.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    tool_name: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    start_time: _dt.datetime = Field(default_factory=_utcnow)
    end_time: Optional[_dt.datetime] = None
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
        """Findings per severity, every level present (zero if unused)."""
        counts = dict.fromkeys((s.value for s in Severity), 0)
        for finding in self.findings:
            counts[finding.severity.value] += 1
        return counts

    @property
    def highest_severity(self) -> Optional[Severity]:
        if not self.findings:
            return None
        return min((f.severity for f in self.findings), key=lambda s: s.rank)

    @property
    def finding_count(self) -> int:
        return len(self.findings)

    def add_finding(self, finding: Finding) -> None:
        self.findings.append(finding)

    def finalize(self, summary: Optional[str] = None) -> ScanResult:
        """Stamp *end_time* and set the summary; returns ``self``.

        Without an explicit *summary* one is built from the severity counts.
        """
        self.end_time = _utcnow()
        if summary is not None:
            self.summary = summary
        else:
            used = [f"{name}: {n}" for name, n in self.severity_counts.items() if n]
            self.summary = f"{self.finding_count} finding(s)" + (
                f" ({', '.join(used)})" if used else ""
            )
        return self
