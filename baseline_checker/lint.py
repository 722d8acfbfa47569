"""
Lint-host adapter: check one script file and return editor-style findings.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .analyzers import ScriptAnalyzer
from .baseline_provider import BaselineProvider
from .feature_mapper import FeatureMapper
from .models import BaselineConfig, Diagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LintFinding:
    line: int
    column: int
    end_line: int
    end_column: int
    message: str
    severity: str
    feature_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
            "message": self.message,
            "severity": self.severity,
            "featureId": self.feature_id,
        }


def format_message(diagnostic: Diagnostic) -> str:
    """Diagnostic message with the first suggestion appended."""
    message = diagnostic.message
    if diagnostic.suggestions:
        suggestion = diagnostic.suggestions[0]
        message += f". Suggestion: {suggestion.title}"
        if suggestion.note:
            message += f" ({suggestion.note})"
    return message


def lint_source(filename: str, text: str, config: BaselineConfig,
                provider: Optional[BaselineProvider] = None) -> List[LintFinding]:
    """Findings for one script file. Analysis errors produce no findings."""
    try:
        evidence = ScriptAnalyzer().analyze(filename, text)
        diagnostics = FeatureMapper(provider or BaselineProvider()).map_evidence_to_diagnostics(evidence, config)
    except Exception as e:
        logger.warning("Baseline lint analysis failed for %s: %s", filename, e)
        return []

    return [
        LintFinding(
            line=d.range.start.line,
            column=d.range.start.col,
            end_line=d.range.end.line,
            end_column=d.range.end.col,
            message=format_message(d),
            severity=d.severity.value,
            feature_id=d.feature_id,
        )
        for d in diagnostics
    ]
