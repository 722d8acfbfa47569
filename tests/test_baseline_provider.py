"""Tests for Baseline status classification."""

import json

import pytest

from baseline_checker.baseline_provider import BaselineProvider, load_dataset
from baseline_checker.feature_registry import get_all_feature_ids
from baseline_checker.models import BaselineStatus

from tests.conftest import make_provider


class TestClassification:
    """get_baseline_status over the bundled snapshot."""

    def test_widely_feature(self, bundled_provider):
        info = bundled_provider.get_baseline_status("api.IntersectionObserver")
        assert info.status is BaselineStatus.WIDELY
        assert info.year == 2019
        assert "chrome" in info.supported_browsers

    def test_newly_feature(self, bundled_provider):
        info = bundled_provider.get_baseline_status("css.properties.text-wrap")
        assert info.status is BaselineStatus.NEWLY
        assert info.year == 2024

    def test_limited_feature(self, bundled_provider):
        info = bundled_provider.get_baseline_status("api.Window.requestIdleCallback")
        assert info.status is BaselineStatus.LIMITED
        assert info.year is None

    def test_missing_feature_is_unknown(self, bundled_provider):
        info = bundled_provider.get_baseline_status("api.DoesNotExist")
        assert info.status is BaselineStatus.UNKNOWN
        assert info.supported_browsers is None
        assert info.year is None

    def test_unrecognized_baseline_value_is_unknown(self):
        provider = BaselineProvider(dataset={"api.X": {"status": {"baseline": "maybe"}}})
        assert provider.get_baseline_status("api.X").status is BaselineStatus.UNKNOWN

    def test_results_are_memoized(self, bundled_provider):
        first = bundled_provider.get_baseline_status("css.selectors.has")
        assert bundled_provider.get_baseline_status("css.selectors.has") is first


class TestIsBaselineSupported:
    """Target semantics."""

    def test_widely_target(self):
        provider = make_provider({"api.A": "widely", "api.B": "newly", "api.C": "limited"})
        assert provider.is_baseline_supported("api.A", "widely")
        assert not provider.is_baseline_supported("api.B", "widely")
        assert not provider.is_baseline_supported("api.C", "widely")
        assert not provider.is_baseline_supported("api.Missing", "widely")

    def test_newly_target(self):
        provider = make_provider({"api.A": "widely", "api.B": "newly", "api.C": "limited"})
        assert provider.is_baseline_supported("api.A", "newly")
        assert provider.is_baseline_supported("api.B", "newly")
        assert not provider.is_baseline_supported("api.C", "newly")

    def test_year_target(self):
        provider = make_provider({"api.A": "widely", "api.B": "newly", "api.C": "limited"},
                                 years={"api.A": 2019, "api.B": 2024})
        assert provider.is_baseline_supported("api.A", 2020)
        assert provider.is_baseline_supported("api.B", 2024)
        assert not provider.is_baseline_supported("api.B", 2023)
        # no year at all never satisfies a numeric target
        assert not provider.is_baseline_supported("api.C", 2030)

    def test_unrecognized_target(self):
        provider = make_provider({"api.A": "widely"})
        assert not provider.is_baseline_supported("api.A", "sometimes")

    @pytest.mark.parametrize("feature_id", get_all_feature_ids())
    def test_widely_implies_newly(self, bundled_provider, feature_id):
        if bundled_provider.is_baseline_supported(feature_id, "widely"):
            assert bundled_provider.is_baseline_supported(feature_id, "newly")


class TestDataset:
    """Dataset loading and id validation."""

    def test_validate_feature_ids(self, bundled_provider):
        valid, invalid = bundled_provider.validate_feature_ids(["api.fetch", "api.Nope", "css.selectors.has"])
        assert valid == ["api.fetch", "css.selectors.has"]
        assert invalid == ["api.Nope"]

    def test_registry_ids_all_in_bundled_dataset(self, bundled_provider):
        _, invalid = bundled_provider.validate_feature_ids(get_all_feature_ids())
        assert invalid == []

    def test_dataset_loaded_once_per_path(self, tmp_path):
        path = tmp_path / "features.json"
        path.write_text(json.dumps({"features": {"api.X": {"status": {"baseline": "high"}}}}))
        assert load_dataset(path) is load_dataset(str(path))

    def test_alternate_dataset_path(self, tmp_path):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps({"api.Y": {"status": {"baseline": False}}}))
        provider = BaselineProvider(dataset_path=path)
        assert provider.get_baseline_status("api.Y").status is BaselineStatus.LIMITED
        assert provider.get_baseline_status("api.fetch").status is BaselineStatus.UNKNOWN
