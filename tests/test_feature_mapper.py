"""Tests for evidence -> diagnostic mapping."""

import pytest

from baseline_checker.baseline_provider import BaselineProvider
from baseline_checker.feature_mapper import (
    FeatureMapper,
    create_message,
    get_severity,
    get_suggestions,
)
from baseline_checker.models import BaselineConfig, BaselineStatus, Severity

from tests.conftest import make_evidence, make_provider

SEVERITY_RANK = {Severity.INFO: 0, Severity.WARN: 1, Severity.ERROR: 2}


def mapper_for(statuses, years=None):
    return FeatureMapper(make_provider(statuses, years))


class TestScenarios:
    """End-to-end mapping of a single evidence item."""

    def test_newly_feature_under_widely_target_is_info(self):
        mapper = mapper_for({"api.IntersectionObserver": "newly"})
        diagnostics = mapper.map_evidence_to_diagnostics(
            [make_evidence("api.IntersectionObserver")], BaselineConfig())
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is Severity.INFO
        assert diagnostics[0].baseline is BaselineStatus.NEWLY

    def test_limited_feature_under_widely_target_is_warn(self):
        mapper = mapper_for({"api.IntersectionObserver": "limited"})
        diagnostics = mapper.map_evidence_to_diagnostics(
            [make_evidence("api.IntersectionObserver")], BaselineConfig())
        assert [d.severity for d in diagnostics] == [Severity.WARN]

    def test_allow_list_suppresses_diagnostic(self):
        mapper = mapper_for({"api.IntersectionObserver": "limited"})
        config = BaselineConfig.build(target="widely", allow=["api.IntersectionObserver"])
        assert mapper.map_evidence_to_diagnostics([make_evidence("api.IntersectionObserver")], config) == []

    def test_supported_feature_produces_nothing(self):
        mapper = mapper_for({"api.fetch": "widely"})
        assert mapper.map_evidence_to_diagnostics([make_evidence("api.fetch")], BaselineConfig()) == []

    def test_unknown_feature_is_warn(self):
        diagnostics = mapper_for({}).map_evidence_to_diagnostics(
            [make_evidence("api.Mystery")], BaselineConfig())
        assert diagnostics[0].severity is Severity.WARN
        assert diagnostics[0].baseline is BaselineStatus.UNKNOWN

    def test_diagnostic_carries_evidence_location(self):
        evidence = make_evidence("api.Window.requestIdleCallback", file="src/x.ts", line=7, col=3)
        diagnostic = mapper_for({"api.Window.requestIdleCallback": "limited"}).map_evidence_to_diagnostics(
            [evidence], BaselineConfig())[0]
        assert diagnostic.file == "src/x.ts"
        assert diagnostic.range == evidence.range
        assert diagnostic.feature_id == "api.Window.requestIdleCallback"


class TestPolicy:
    """Severity, strict mode and ordering."""

    def test_strict_mode(self):
        mapper = mapper_for({"api.A": "limited", "api.B": "newly"})
        evidence = [make_evidence("api.A"), make_evidence("api.B"), make_evidence("api.C")]
        diagnostics = mapper.map_evidence_to_diagnostics(evidence, BaselineConfig(strict=True))
        assert [d.severity for d in diagnostics] == [Severity.ERROR, Severity.WARN, Severity.ERROR]

    @pytest.mark.parametrize("status", list(BaselineStatus))
    def test_strict_never_lowers_severity(self, status):
        assert SEVERITY_RANK[get_severity(status, True)] >= SEVERITY_RANK[get_severity(status, False)]

    def test_output_order_matches_input(self):
        mapper = mapper_for({"api.A": "limited", "api.B": "newly", "api.C": "widely"})
        evidence = [make_evidence(fid, line=n) for n, fid in enumerate(["api.B", "api.C", "api.A", "api.B"], 1)]
        diagnostics = mapper.map_evidence_to_diagnostics(evidence, BaselineConfig())
        assert [(d.feature_id, d.range.start.line) for d in diagnostics] == [
            ("api.B", 1), ("api.A", 3), ("api.B", 4),
        ]

    def test_mapping_is_deterministic(self):
        mapper = mapper_for({"api.A": "limited", "api.B": "newly"})
        evidence = [make_evidence("api.A"), make_evidence("api.B")]
        config = BaselineConfig(strict=True)
        assert mapper.map_evidence_to_diagnostics(evidence, config) == \
            mapper.map_evidence_to_diagnostics(evidence, config)

    def test_year_target(self):
        mapper = mapper_for({"api.A": "widely", "api.B": "newly"}, years={"api.A": 2019, "api.B": 2024})
        evidence = [make_evidence("api.A"), make_evidence("api.B")]
        diagnostics = mapper.map_evidence_to_diagnostics(evidence, BaselineConfig(target=2020))
        assert [d.feature_id for d in diagnostics] == ["api.B"]
        assert diagnostics[0].message == "Feature 'B' is newly available but may not be compatible with target '2020'"

    def test_classification_failure_skips_only_that_item(self):
        class FlakyProvider(BaselineProvider):
            def get_baseline_status(self, feature_id):
                if feature_id == "api.Broken":
                    raise KeyError(feature_id)
                return super().get_baseline_status(feature_id)

        mapper = FeatureMapper(FlakyProvider(dataset={}))
        diagnostics = mapper.map_evidence_to_diagnostics(
            [make_evidence("api.Broken"), make_evidence("api.Other")], BaselineConfig())
        assert [d.feature_id for d in diagnostics] == ["api.Other"]


class TestMessages:
    """Message templates."""

    def test_limited(self):
        assert create_message("api.Window.requestIdleCallback", BaselineStatus.LIMITED, "widely") == (
            "Feature 'requestIdleCallback' has limited browser support and is not compatible with target 'widely'")

    def test_unknown_includes_target(self):
        assert create_message("api.Mystery", BaselineStatus.UNKNOWN, "newly") == (
            "Feature 'Mystery' has unknown compatibility status (target 'newly')")

    def test_newly_with_widely_target(self):
        assert create_message("css.properties.text-wrap", BaselineStatus.NEWLY, "widely") == (
            "Feature 'text-wrap' is newly available in Baseline but target requires 'widely' available features")

    def test_newly_with_year_target(self):
        assert create_message("css.properties.text-wrap", BaselineStatus.NEWLY, 2023) == (
            "Feature 'text-wrap' is newly available but may not be compatible with target '2023'")

    def test_other_status(self):
        assert create_message("api.fetch", BaselineStatus.WIDELY, 2016) == (
            "Feature 'fetch' may not be compatible with target '2016'")


class TestSuggestions:
    """Suggestion lookup."""

    def test_exact_entry(self):
        suggestions = get_suggestions("css.selectors.has", BaselineStatus.NEWLY)
        assert suggestions[0].title == "Use @supports feature detection"
        assert suggestions[0].code == "@supports selector(:has(*)) { /* your styles */ }"

    def test_family_rules(self):
        assert get_suggestions("css.properties.container-type", BaselineStatus.NEWLY)[0].title == \
            "Use media queries as fallback"
        assert get_suggestions("api.Window.sessionStorage", BaselineStatus.LIMITED)[0].title == \
            "Use try-catch with fallback"
        assert get_suggestions("html.elements.div.popover", BaselineStatus.NEWLY)[0].title == \
            "Use JavaScript show/hide"

    @pytest.mark.parametrize("status, title", [
        (BaselineStatus.LIMITED, "Provide fallback or polyfill"),
        (BaselineStatus.NEWLY, "Use feature detection"),
        (BaselineStatus.UNKNOWN, "Verify browser support"),
    ])
    def test_status_fallback(self, status, title):
        assert get_suggestions("api.SomethingElse", status)[0].title == title

    def test_no_fallback_for_widely(self):
        assert get_suggestions("api.SomethingElse", BaselineStatus.WIDELY) == ()
