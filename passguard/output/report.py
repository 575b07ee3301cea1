"""
PassGuard Report Generator
===========================

Turns strength reports into a :class:`~shared.models.CheckResult` and
writes it as JSON for CI pipelines or audit tooling. Only masked
candidates are written; the raw password never leaves the process.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from shared.models import CheckResult, Finding, Severity
from passguard.core.models import StrengthLabel, StrengthReport

_LABEL_SEVERITY: dict[StrengthLabel, Severity] = {
    StrengthLabel.VERY_WEAK: Severity.HIGH,
    StrengthLabel.WEAK: Severity.MEDIUM,
    StrengthLabel.FAIR: Severity.LOW,
    StrengthLabel.STRONG: Severity.INFO,
    StrengthLabel.VERY_STRONG: Severity.INFO,
}


def findings_for(report: StrengthReport) -> list[Finding]:
    """One finding per violated rule plus one for the strength band."""
    findings = [
        Finding(
            severity=(
                Severity.CRITICAL
                if violation.rule_id == "common_password"
                else Severity.HIGH
            ),
            title=f"Regla incumplida: {violation.rule_id}",
            description=violation.message,
            evidence={"password": report.password_masked},
            rule_id=violation.rule_id,
        )
        for violation in report.violations
    ]
    findings.append(
        Finding(
            severity=_LABEL_SEVERITY[report.label],
            title=f"Fortaleza: {report.label.value}",
            description=(
                f"Puntuación {report.score}/100, longitud {report.length}, "
                f"entropía estimada {report.entropy_bits:.1f} bits."
            ),
            evidence={"password": report.password_masked, "score": report.score},
            recommendation=" ".join(report.suggestions),
        )
    )
    return findings


def build_check_result(
    reports: Sequence[StrengthReport],
    target: str,
    tool_name: str = "passguard",
) -> CheckResult:
    """Bundle one or more strength reports into a finalized CheckResult."""
    result = CheckResult(tool_name=tool_name, target=target or "[empty]")
    for report in reports:
        for finding in findings_for(report):
            result.add_finding(finding)
    compliant = sum(1 for r in reports if r.compliant)
    result.metadata = {
        "checked": len(reports),
        "compliant": compliant,
        "reports": [r.model_dump(mode="json") for r in reports],
    }
    return result.finalize(
        f"{compliant}/{len(reports)} contraseñas cumplen la política"
    )


class PassGuardReportGenerator:
    """Writes CheckResults to disk as JSON.

    Usage::

        generator = PassGuardReportGenerator()
        generator.generate_json(result, Path("passguard.json"))
    """

    def __init__(self, version: str = "1.0.0") -> None:
        self.version = version

    def to_dict(self, result: CheckResult) -> dict[str, Any]:
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": result.tool_name,
                "target": result.target,
                "version": self.version,
            },
            "summary": {
                "total_findings": result.finding_count,
                "severity_counts": result.severity_counts,
                "duration_seconds": result.duration_seconds,
                "description": result.summary,
            },
            "findings": [f.model_dump(mode="json") for f in result.findings],
            "metadata": result.metadata,
        }

    def generate_json(self, result: CheckResult, output_path: Path) -> Path:
        """Write *result* to *output_path*, creating parent directories.

        Returns:
            Path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(self.to_dict(result), indent=2, ensure_ascii=False, default=str),
            encoding="utf-8",
        )
        return output_path
