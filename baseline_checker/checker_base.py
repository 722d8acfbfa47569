"""
Base analyzer class shared by the script, template and stylesheet analyzers.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from .feature_registry import get_feature_id
from .models import FeatureEvidence, Language, Position, Range
from .utils import line_starts, offset_to_position

logger = logging.getLogger(__name__)


class BaseAnalyzer:
    """Base class for all analyzers.

    Subclasses implement ``_run_analysis`` and report matches through
    ``_add_evidence``. An instance holds per-file state, so use one instance
    per thread.
    """

    language: Language
    # Registry namespace this analyzer is allowed to resolve into.
    namespace: str

    def __init__(self):
        self.evidence: List[FeatureEvidence] = []
        self.file_path: Optional[str] = None
        self.content: str = ""
        self._line_starts: List[int] = [0]

    def analyze(self, file_path: Union[str, Path], content: str) -> List[FeatureEvidence]:
        """Collect evidence for one file. Failures yield no evidence."""
        self.file_path = str(file_path)
        self.content = content
        self.evidence = []
        self._line_starts = line_starts(content)
        try:
            self._run_analysis()
        except Exception as e:
            logger.warning("Failed to analyze %s file %s: %s", self.language.value, self.file_path, e)
            return []
        return self.evidence

    def _run_analysis(self):
        """Override in subclasses to implement the tree walk."""
        pass

    def _lookup(self, construct: str) -> Optional[str]:
        return get_feature_id(construct, self.namespace)

    def _position(self, offset: int) -> Position:
        return offset_to_position(offset, self._line_starts)

    def _add_evidence(
        self,
        start: int,
        end: int,
        code: str,
        feature_id: str,
        **meta: Any,
    ):
        """Record evidence spanning character offsets [start, end)."""
        self._add_evidence_at(Range(self._position(start), self._position(end)), code, feature_id, **meta)

    def _add_evidence_at(self, span: Range, code: str, feature_id: str, **meta: Any):
        self.evidence.append(
            FeatureEvidence(
                file=self.file_path or "",
                lang=self.language,
                range=span,
                code=code,
                feature_id=feature_id,
                meta=meta,
            )
        )
