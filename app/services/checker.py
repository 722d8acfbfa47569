"""Checker service: wraps baseline_checker and maps to API models."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from fastapi import HTTPException

from baseline_checker.main_checker import AnalyzerOptions, BaselineChecker
from baseline_checker.models import BaselineConfig, Summary
from baseline_checker.reporter import ReportGenerator
from baseline_checker.utils import detect_language

from ..config import (
    default_baseline_config,
    get_dataset_path,
    get_max_concurrency,
    get_max_file_size,
)
from ..schemas import AnalyzeRequest, CheckRequest, PolicyFields

logger = logging.getLogger(__name__)


def build_config(req: PolicyFields) -> BaselineConfig:
    """Merge request policy over the environment defaults. Bad values -> HTTP 400."""
    try:
        defaults = default_baseline_config()
        return BaselineConfig.build(
            target=req.target if req.target is not None else defaults.target,
            strict=req.strict if req.strict is not None else defaults.strict,
            allow=req.allow if req.allow is not None else defaults.allow,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))


class CheckerService:
    """Wraps BaselineChecker for use by the API."""

    def __init__(self, checker: Optional[BaselineChecker] = None):
        self._checker = checker

    @property
    def checker(self) -> BaselineChecker:
        if self._checker is None:
            self._checker = BaselineChecker(dataset_path=get_dataset_path())
        return self._checker

    def check_code(self, req: CheckRequest) -> Dict[str, Any]:
        """Analyze one in-memory file."""
        config = build_config(req)
        if detect_language(req.filename) is None:
            raise HTTPException(400, f"Unsupported file type: {req.filename}")
        evidence = self.checker.analyze_source(req.filename, req.code)
        diagnostics = self.checker.mapper.map_evidence_to_diagnostics(evidence, config)
        return {
            "summary": Summary.from_diagnostics(diagnostics).to_dict(),
            "config": config.to_dict(),
            "evidence": [e.to_dict() for e in evidence],
            "diagnostics": [d.to_dict() for d in diagnostics],
        }

    def analyze_project(self, req: AnalyzeRequest) -> Dict[str, Any]:
        """Analyze a project folder on the server and return the JSON report."""
        config = build_config(req)
        root = Path(req.project_root)
        if not root.is_absolute():
            raise HTTPException(400, "project_root must be absolute")
        if not root.exists():
            raise HTTPException(404, f"Project root not found: {req.project_root}")
        if not root.is_dir():
            raise HTTPException(400, f"project_root must be a folder: {req.project_root}")
        _reject_escaping_paths(root, req.files or [])

        options = AnalyzerOptions(
            config=config,
            project_root=root,
            files=req.files,
            patterns=req.patterns,
            max_concurrency=req.max_concurrency or get_max_concurrency(),
            max_file_size=req.max_file_size or get_max_file_size(),
        )
        report = self.checker.analyze(options)
        return ReportGenerator.generate_json_report(report, project_root=root)

    def validate_registry(self) -> Dict[str, List[str]]:
        return self.checker.validate_feature_registry()


def _reject_escaping_paths(root: Path, files: Iterable[str]) -> None:
    resolved_root = root.resolve()
    for entry in files:
        path = Path(entry)
        target = (path if path.is_absolute() else resolved_root / path).resolve()
        try:
            target.relative_to(resolved_root)
        except ValueError:
            raise HTTPException(400, f"File is outside project_root: {entry}")


checker_svc = CheckerService()
