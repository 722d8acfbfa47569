"""
Report generation for the baseline checker.
"""

import json
import os
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from . import __version__
from .models import AnalysisReport, Diagnostic, Severity

_SECTIONS = (
    (Severity.ERROR, "ERRORS"),
    (Severity.WARN, "WARNINGS"),
    (Severity.INFO, "INFO"),
)


def _relative(file_path: str, project_root: Optional[Union[str, Path]]) -> str:
    if not project_root or not file_path:
        return file_path
    try:
        return Path(file_path).resolve().relative_to(Path(project_root).resolve()).as_posix()
    except ValueError:
        return file_path


class ReportGenerator:
    """Generate reports from an analysis run."""

    @staticmethod
    def generate_text_report(report: AnalysisReport, project_root: Optional[Union[str, Path]] = None) -> str:
        """Generate a text report."""
        if not report.diagnostics:
            return f"\n✓ No Baseline compatibility issues found (target '{report.config.target}')\n"

        lines = [f"\n{'='*80}"]
        lines.append(f"Baseline Compatibility Report (target '{report.config.target}'"
                     f"{', strict' if report.config.strict else ''})")
        lines.append(f"{'='*80}\n")

        for severity, title in _SECTIONS:
            matching = [d for d in report.diagnostics if d.severity == severity]
            if not matching:
                continue
            lines.append(f"{title} ({len(matching)}):")
            lines.append("-" * 80)

            by_file: Dict[str, List[Diagnostic]] = defaultdict(list)
            for diagnostic in matching:
                by_file[_relative(diagnostic.file, project_root)].append(diagnostic)
            for file_name, diagnostics in by_file.items():
                lines.append(f"  {file_name}")
                for diagnostic in diagnostics:
                    start = diagnostic.range.start
                    lines.append(f"    {start.line}:{start.col}  {diagnostic.message}")
                    lines.append(f"      Baseline: {diagnostic.baseline.value} ({diagnostic.feature_id})")
                    if diagnostic.suggestions:
                        lines.append(f"      Fix: {diagnostic.suggestions[0].title}")
                lines.append("")

        summary = report.summary
        lines.append(f"\nSummary: {summary.errors} errors, {summary.warnings} warnings, {summary.infos} info "
                     f"({len(report.evidence)} features detected)")
        lines.append("="*80)

        return "\n".join(lines)

    @staticmethod
    def generate_json_report(report: AnalysisReport, project_root: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """Machine-readable report; file paths are relative to ``project_root`` when given."""
        data = report.to_dict()
        for entry in data["diagnostics"] + data["evidence"]:
            entry["file"] = _relative(entry["file"], project_root)
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            **data,
        }

    @staticmethod
    def write_json_report(report: AnalysisReport, output_path: Union[str, Path],
                          project_root: Optional[Union[str, Path]] = None) -> Path:
        """Write the JSON report to ``output_path``, creating parent folders."""
        output_path = Path(output_path)
        os.makedirs(output_path.parent, exist_ok=True)
        payload = ReportGenerator.generate_json_report(report, project_root)
        output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return output_path

    @staticmethod
    def generate_summary(diagnostics: Iterable[Diagnostic]) -> Dict[str, int]:
        """Generate a summary count by feature id."""
        summary: Dict[str, int] = {}
        for diagnostic in diagnostics:
            summary[diagnostic.feature_id] = summary.get(diagnostic.feature_id, 0) + 1
        return summary
