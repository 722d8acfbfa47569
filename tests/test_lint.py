"""Tests for the lint-host adapter."""

from baseline_checker.lint import LintFinding, lint_source
from baseline_checker.models import BaselineConfig

from tests.conftest import make_provider


class TestLintSource:
    def test_finding_with_suggestion(self):
        provider = make_provider({"api.Window.requestIdleCallback": "limited"})
        findings = lint_source("a.ts", "x();\nrequestIdleCallback(cb);", BaselineConfig(), provider)
        assert findings == [LintFinding(
            line=2,
            column=1,
            end_line=2,
            end_column=20,
            message=(
                "Feature 'requestIdleCallback' has limited browser support and is not compatible "
                "with target 'widely'. Suggestion: Use setTimeout as fallback (setTimeout provides basic deferral)"
            ),
            severity="warn",
            feature_id="api.Window.requestIdleCallback",
        )]

    def test_allow_list_and_supported_features(self):
        provider = make_provider({"api.fetch": "widely", "api.Window.requestIdleCallback": "limited"})
        config = BaselineConfig.build(allow=["api.Window.requestIdleCallback"])
        assert lint_source("a.ts", "fetch(u); requestIdleCallback(cb);", config, provider) == []

    def test_default_provider(self):
        findings = lint_source("a.ts", "navigator.share({});", BaselineConfig())
        assert [f.feature_id for f in findings] == ["api.Navigator.share"]
        assert findings[0].to_dict()["endColumn"] == findings[0].end_column

    def test_garbage_input(self):
        assert isinstance(lint_source("a.ts", "@@@ ((( }}}", BaselineConfig()), list)
