"""
Main checker class that coordinates the analyzers, the mapper and the provider.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .analyzers import ScriptAnalyzer, StylesheetAnalyzer, TemplateAnalyzer
from .baseline_provider import BaselineProvider
from .checker_base import BaseAnalyzer
from .discovery import DEFAULT_MAX_FILE_SIZE, discover_files, is_within_size_limit, resolve_files
from .feature_mapper import FeatureMapper
from .feature_registry import get_all_feature_ids
from .models import AnalysisReport, BaselineConfig, FeatureEvidence, Language, Summary
from .utils import detect_language

logger = logging.getLogger(__name__)

_ANALYZERS = {
    Language.SCRIPT: ScriptAnalyzer,
    Language.MARKUP: TemplateAnalyzer,
    Language.STYLESHEET: StylesheetAnalyzer,
}


@dataclass
class AnalyzerOptions:
    """Inputs of one analysis run."""
    config: BaselineConfig = field(default_factory=BaselineConfig)
    project_root: Union[str, Path] = "."
    files: Optional[Sequence[Union[str, Path]]] = None
    patterns: Optional[Sequence[str]] = None
    max_concurrency: Optional[int] = None
    max_file_size: Optional[int] = DEFAULT_MAX_FILE_SIZE


def create_analyzer(language: Language) -> BaseAnalyzer:
    """A fresh analyzer for ``language``; analyzers hold per-file state."""
    return _ANALYZERS[language]()


class BaselineChecker:
    """Run the analyzers over a project and grade their evidence."""

    def __init__(self, provider: Optional[BaselineProvider] = None,
                 dataset_path: Optional[Union[str, Path]] = None):
        self.provider = provider or BaselineProvider(dataset_path=dataset_path)
        self.mapper = FeatureMapper(self.provider)

    def analyze(self, options: AnalyzerOptions) -> AnalysisReport:
        """Analyze every resolved file and map the evidence once with the run's config."""
        files = self.resolve_files(options)
        workers = max(1, options.max_concurrency or os.cpu_count() or 1)
        logger.info("Analyzing %d files with %d workers", len(files), workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields results in submission order.
            per_file = list(executor.map(lambda path: self.analyze_file(path, options), files))

        evidence: List[FeatureEvidence] = [item for items in per_file for item in items]
        diagnostics = self.mapper.map_evidence_to_diagnostics(evidence, options.config)
        summary = Summary.from_diagnostics(diagnostics)
        logger.info("Found %d evidence items, %d diagnostics", len(evidence), summary.total)
        return AnalysisReport(
            summary=summary,
            evidence=tuple(evidence),
            diagnostics=tuple(diagnostics),
            config=options.config,
        )

    def resolve_files(self, options: AnalyzerOptions) -> List[Path]:
        if options.files:
            return resolve_files(options.project_root, options.files)
        return discover_files(options.project_root, options.patterns)

    def analyze_file(self, file_path: Union[str, Path], options: Optional[AnalyzerOptions] = None) -> List[FeatureEvidence]:
        """Evidence for one file on disk. Any failure yields no evidence."""
        file_path = Path(file_path)
        max_file_size = options.max_file_size if options else DEFAULT_MAX_FILE_SIZE

        if detect_language(file_path) is None:
            logger.debug("Skipping %s: unsupported file type", file_path)
            return []
        try:
            if not is_within_size_limit(file_path, max_file_size):
                logger.warning("Skipping %s: larger than %d bytes", file_path, max_file_size)
                return []
            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                content = f.read()
        except OSError as e:
            logger.warning("Could not read file %s: %s", file_path, e)
            return []

        return self.analyze_source(file_path, content)

    def analyze_source(self, file_path: Union[str, Path], content: str) -> List[FeatureEvidence]:
        """Evidence for already-read text, dispatched by the file extension."""
        language = detect_language(file_path)
        if language is None:
            return []
        try:
            return create_analyzer(language).analyze(file_path, content)
        except Exception as e:
            logger.warning("Failed to analyze %s: %s", file_path, e)
            return []

    def validate_feature_registry(self) -> Dict[str, List[str]]:
        """Check every registry feature id against the provider's dataset."""
        valid, invalid = self.provider.validate_feature_ids(get_all_feature_ids())
        if invalid:
            logger.warning("Registry ids missing from dataset: %s", ", ".join(invalid))
        return {"valid": valid, "invalid": invalid}
