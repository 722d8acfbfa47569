"""
Evidence, baseline and diagnostic data models for the baseline checker.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

Target = Union[str, int]

TARGET_WIDELY = "widely"
TARGET_NEWLY = "newly"


class Language(Enum):
    """Which analyzer produced a piece of evidence."""
    SCRIPT = "script"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"


class BaselineStatus(Enum):
    """Cross-engine support maturity of a feature."""
    WIDELY = "widely"
    NEWLY = "newly"
    LIMITED = "limited"
    UNKNOWN = "unknown"


class Severity(Enum):
    """Diagnostic severity levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


@dataclass(frozen=True)
class Position:
    """1-based line/column in the original source text."""
    line: int
    col: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "col": self.col}


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True)
class FeatureEvidence:
    """One observed occurrence of a tracked construct."""
    file: str
    lang: Language
    range: Range
    code: str
    feature_id: str
    meta: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.feature_id:
            raise ValueError("FeatureEvidence requires a non-empty feature_id")

    def shifted(self, line_offset: int, col_offset: int) -> "FeatureEvidence":
        """Relocate evidence found in an embedded snippet.

        ``line_offset``/``col_offset`` are the 0-based line and column of the
        snippet's first character in the enclosing file. Only positions on the
        snippet's first line move horizontally.
        """
        def move(pos: Position) -> Position:
            col = pos.col + col_offset if pos.line == 1 else pos.col
            return Position(pos.line + line_offset, col)

        return replace(self, range=Range(move(self.range.start), move(self.range.end)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "lang": self.lang.value,
            "range": self.range.to_dict(),
            "code": self.code,
            "featureId": self.feature_id,
            "meta": dict(self.meta),
        }


@dataclass(frozen=True)
class BaselineInfo:
    """Classification of one feature identifier."""
    status: BaselineStatus
    supported_browsers: Optional[Tuple[str, ...]] = None
    year: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status.value}
        if self.supported_browsers is not None:
            data["supportedBrowsers"] = list(self.supported_browsers)
        if self.year is not None:
            data["year"] = self.year
        return data


@dataclass(frozen=True)
class BaselineConfig:
    """User policy for one analysis run."""
    target: Target = TARGET_WIDELY
    strict: bool = False
    allow: FrozenSet[str] = frozenset()

    def __post_init__(self):
        # Accept any iterable of ids for convenience, store it frozen.
        if not isinstance(self.allow, frozenset):
            object.__setattr__(self, "allow", frozenset(self.allow))

    @staticmethod
    def parse_target(value: Any) -> Target:
        """Parse 'widely', 'newly' or a year (int or digit string)."""
        if isinstance(value, bool):
            raise ValueError(f"Invalid baseline target: {value!r}")
        if isinstance(value, int):
            return value
        text = str(value).strip().lower()
        if text in (TARGET_WIDELY, TARGET_NEWLY):
            return text
        if text.isdigit():
            return int(text)
        raise ValueError(f"Invalid baseline target: {value!r} (expected 'widely', 'newly' or a year)")

    @classmethod
    def build(cls, target: Any = TARGET_WIDELY, strict: bool = False,
              allow: Optional[Iterable[str]] = None) -> "BaselineConfig":
        return cls(target=cls.parse_target(target), strict=bool(strict),
                   allow=frozenset(a for a in (allow or []) if a))

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "strict": self.strict, "allow": sorted(self.allow)}


@dataclass(frozen=True)
class Suggestion:
    """Remediation hint attached to a diagnostic."""
    title: str
    code: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {"title": self.title}
        if self.code is not None:
            data["code"] = self.code
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class Diagnostic:
    """A reportable finding derived from one evidence item."""
    severity: Severity
    message: str
    feature_id: str
    baseline: BaselineStatus
    file: str
    range: Range
    suggestions: Tuple[Suggestion, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "featureId": self.feature_id,
            "baseline": self.baseline.value,
            "file": self.file,
            "range": self.range.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass(frozen=True)
class Summary:
    total: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0

    @classmethod
    def from_diagnostics(cls, diagnostics: List[Diagnostic]) -> "Summary":
        counts = {severity: 0 for severity in Severity}
        for diagnostic in diagnostics:
            counts[diagnostic.severity] += 1
        return cls(
            total=len(diagnostics),
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARN],
            infos=counts[Severity.INFO],
        )

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "errors": self.errors,
                "warnings": self.warnings, "infos": self.infos}


@dataclass(frozen=True)
class AnalysisReport:
    """Aggregate result of one analysis run."""
    summary: Summary
    evidence: Tuple[FeatureEvidence, ...]
    diagnostics: Tuple[Diagnostic, ...]
    config: BaselineConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "config": self.config.to_dict(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "evidence": [e.to_dict() for e in self.evidence],
        }
