"""Tests for the data model."""

import pytest

from baseline_checker.models import BaselineConfig, Language, Position, Range, Summary

from tests.conftest import make_evidence


class TestBaselineConfig:
    @pytest.mark.parametrize("value, expected", [
        ("widely", "widely"),
        ("NEWLY", "newly"),
        ("2023", 2023),
        (2021, 2021),
    ])
    def test_parse_target(self, value, expected):
        assert BaselineConfig.parse_target(value) == expected

    @pytest.mark.parametrize("value", ["sometimes", "", True, "20x3"])
    def test_invalid_target(self, value):
        with pytest.raises(ValueError):
            BaselineConfig.parse_target(value)

    def test_build(self):
        config = BaselineConfig.build(target="2022", strict=1, allow=["api.A", "", "api.A"])
        assert config == BaselineConfig(target=2022, strict=True, allow=frozenset({"api.A"}))


class TestFeatureEvidence:
    def test_requires_feature_id(self):
        with pytest.raises(ValueError):
            make_evidence("")

    def test_shifted(self):
        evidence = make_evidence("api.fetch", line=1, col=3, code="fetch")
        moved = evidence.shifted(4, 10)
        assert moved.range == Range(Position(5, 13), Position(5, 18))
        assert moved.feature_id == "api.fetch"

    def test_shifted_later_line_keeps_column(self):
        evidence = make_evidence("api.fetch", line=2, col=3)
        assert evidence.shifted(4, 10).range.start == Position(6, 3)

    def test_to_dict(self):
        data = make_evidence("api.fetch", lang=Language.SCRIPT).to_dict()
        assert data["featureId"] == "api.fetch"
        assert data["lang"] == "script"
        assert data["range"]["start"] == {"line": 1, "col": 1}


class TestSummary:
    def test_empty(self):
        assert Summary.from_diagnostics([]) == Summary(0, 0, 0, 0)
