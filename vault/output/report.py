"""
Vault Report Generator
=======================

Exports a :class:`~shared.models.ScanResult` as a JSON document for
scripting and pipeline use. Findings, the summary and the operation
payload (``metadata``) are written verbatim.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from shared.models import ScanResult

_REPORT_VERSION = "1.0.0"


class VaultReportGenerator:
    """Builds JSON reports from vault ScanResults."""

    def build(self, result: ScanResult) -> dict[str, Any]:
        """Return the report as a plain dictionary."""
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": result.tool_name,
                "target": result.target,
                "version": _REPORT_VERSION,
            },
            "summary": {
                "total_findings": result.finding_count,
                "severity_counts": result.severity_counts,
                "highest_severity": (
                    result.highest_severity.value if result.highest_severity else None
                ),
                "duration_seconds": result.duration_seconds,
                "description": result.summary,
            },
            "findings": [f.model_dump(mode="json") for f in result.findings],
            "metadata": result.metadata,
        }

    def render_json(self, result: ScanResult) -> str:
        """Serialise the report to an indented JSON string."""
        return json.dumps(self.build(result), indent=2, ensure_ascii=False, default=str)

    def generate_json(self, result: ScanResult, output_path: Optional[Path] = None) -> Path:
        """Write the JSON report to *output_path* and return the path.

        Args:
            result: ScanResult to export.
            output_path: Destination file. Defaults to
                ``vault_report_<tool>.json`` in the working directory.
        """
        path = output_path or Path(f"vault_report_{result.tool_name}.json")
        return self.write(self.build(result), path)

    @staticmethod
    def write(document: dict[str, Any], path: Path) -> Path:
        """Write any JSON-serialisable *document* to *path*, creating parents."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(document, indent=2, ensure_ascii=False, default=str), encoding="utf-8"
        )
        return path
