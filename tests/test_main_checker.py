"""Tests for the orchestrator."""

import json
from pathlib import Path

from baseline_checker.main_checker import AnalyzerOptions, BaselineChecker
from baseline_checker.models import BaselineConfig, Language, Severity

from tests.conftest import write

EXPECTED_IDS = [
    "css.properties.text-wrap",
    "html.elements.div.popover",
    "api.Window.requestIdleCallback",
    "api.IntersectionObserver",
]


class TestAnalyze:
    """Whole-project runs over the bundled dataset."""

    def test_discovers_and_dispatches_by_extension(self, angular_project):
        report = BaselineChecker().analyze(AnalyzerOptions(project_root=angular_project))
        assert [e.feature_id for e in report.evidence] == EXPECTED_IDS
        assert [e.lang for e in report.evidence] == [
            Language.STYLESHEET, Language.MARKUP, Language.SCRIPT, Language.SCRIPT,
        ]

    def test_diagnostics_and_summary(self, angular_project):
        report = BaselineChecker().analyze(AnalyzerOptions(project_root=angular_project))
        assert [(d.feature_id, d.severity) for d in report.diagnostics] == [
            ("css.properties.text-wrap", Severity.INFO),
            ("html.elements.div.popover", Severity.INFO),
            ("api.Window.requestIdleCallback", Severity.WARN),
        ]
        assert report.summary.total == 3
        assert report.summary.errors == 0
        assert report.summary.warnings == 1
        assert report.summary.infos == 2
        assert report.config == BaselineConfig()

    def test_strict_config(self, angular_project):
        options = AnalyzerOptions(config=BaselineConfig(strict=True), project_root=angular_project)
        report = BaselineChecker().analyze(options)
        assert report.summary.errors == 1
        assert report.summary.warnings == 2

    def test_results_independent_of_concurrency(self, angular_project):
        checker = BaselineChecker()
        serial = checker.analyze(AnalyzerOptions(project_root=angular_project, max_concurrency=1))
        parallel = checker.analyze(AnalyzerOptions(project_root=angular_project, max_concurrency=8))
        assert serial.evidence == parallel.evidence
        assert serial.diagnostics == parallel.diagnostics

    def test_explicit_file_list_keeps_order(self, angular_project):
        options = AnalyzerOptions(
            project_root=angular_project,
            files=["src/app/app.component.ts", "src/app/app.component.css"],
        )
        report = BaselineChecker().analyze(options)
        assert [e.feature_id for e in report.evidence] == [
            "api.Window.requestIdleCallback",
            "api.IntersectionObserver",
            "css.properties.text-wrap",
        ]

    def test_malformed_file_does_not_abort_run(self, angular_project):
        write(angular_project, "src/app/broken.ts", "export class {{{ (((( requestIdleCallback(\n")
        write(angular_project, "src/app/broken.css", "}}} @@@ { .x")
        report = BaselineChecker().analyze(AnalyzerOptions(project_root=angular_project))
        assert [e.feature_id for e in report.evidence] == EXPECTED_IDS
        assert not any(e.file.endswith("broken.ts") for e in report.evidence)
        assert not any(d.file.endswith("broken.ts") for d in report.diagnostics)

    def test_size_limit_skips_files(self, angular_project):
        report = BaselineChecker().analyze(AnalyzerOptions(project_root=angular_project, max_file_size=10))
        assert report.evidence == ()
        assert report.summary.total == 0

    def test_empty_project(self, tmp_path):
        report = BaselineChecker().analyze(AnalyzerOptions(project_root=tmp_path))
        assert report.evidence == ()
        assert report.diagnostics == ()


class TestSingleFile:
    """analyze_file / analyze_source."""

    def test_unsupported_extension(self, tmp_path):
        path = write(tmp_path, "notes.md", "fetch()")
        assert BaselineChecker().analyze_file(path) == []
        assert BaselineChecker().analyze_source("notes.md", "fetch()") == []

    def test_missing_file(self, tmp_path):
        assert BaselineChecker().analyze_file(tmp_path / "gone.ts") == []

    def test_analyze_source_dispatch(self):
        checker = BaselineChecker()
        assert [e.feature_id for e in checker.analyze_source("a.scss", ".a { gap: 1rem; }")] == \
            ["css.properties.gap"]
        assert [e.feature_id for e in checker.analyze_source("a.htm", "<dialog></dialog>")] == \
            ["html.elements.dialog"]
        assert [e.feature_id for e in checker.analyze_source("a.mjs", "structuredClone(x)")] == \
            ["api.structuredClone"]

    def test_evidence_file_is_the_given_path(self, angular_project):
        path = angular_project / "src/app/app.component.css"
        evidence = BaselineChecker().analyze_file(path)
        assert Path(evidence[0].file) == path


class TestRegistryValidation:
    """Registry self-check."""

    def test_registry_matches_bundled_dataset(self):
        result = BaselineChecker().validate_feature_registry()
        assert result["invalid"] == []
        assert "api.IntersectionObserver" in result["valid"]

    def test_registry_ids_missing_from_dataset_are_invalid(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"features": {"api.fetch": {"status": {"baseline": "high"}}}}))
        result = BaselineChecker(dataset_path=path).validate_feature_registry()
        assert result["valid"] == ["api.fetch"]
        assert "api.IntersectionObserver" in result["invalid"]
        assert "css.selectors.has" in result["invalid"]
