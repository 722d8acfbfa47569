"""
Baseline status lookups backed by a web-features dataset.
"""

import json
import logging
import threading
from datetime import date
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .models import TARGET_NEWLY, TARGET_WIDELY, BaselineInfo, BaselineStatus, Target

logger = logging.getLogger(__name__)

BUNDLED_DATASET = "web-features.json"

_BASELINE_TO_STATUS = {
    "high": BaselineStatus.WIDELY,
    "low": BaselineStatus.NEWLY,
    False: BaselineStatus.LIMITED,
}

# Datasets loaded in this process, keyed by source path. Read-only once stored.
_DATASETS: Dict[str, Mapping[str, Any]] = {}
_DATASETS_LOCK = threading.Lock()


def _read_dataset(path: Optional[Path]) -> Mapping[str, Any]:
    if path is None:
        text = resources.files(__package__).joinpath("data").joinpath(BUNDLED_DATASET).read_text(encoding="utf-8")
    else:
        text = path.read_text(encoding="utf-8")
    data = json.loads(text)
    # Accept either {"features": {...}} or a bare id -> feature mapping.
    features = data.get("features", data) if isinstance(data, dict) else {}
    if not isinstance(features, dict):
        raise ValueError(f"Dataset has no feature mapping: {path or BUNDLED_DATASET}")
    return features


def load_dataset(path: Optional[Union[str, Path]] = None) -> Mapping[str, Any]:
    """Load a dataset at most once per process per source path."""
    resolved = Path(path).expanduser().resolve() if path else None
    key = str(resolved) if resolved else BUNDLED_DATASET
    with _DATASETS_LOCK:
        if key not in _DATASETS:
            _DATASETS[key] = _read_dataset(resolved)
            logger.debug("Loaded %d features from %s", len(_DATASETS[key]), key)
        return _DATASETS[key]


def _year_of(value: Any) -> Optional[int]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10]).year
    except ValueError:
        # web-features marks some dates as ranges, e.g. "≤2018-10-02".
        digits = "".join(ch for ch in str(value) if ch.isdigit())
        return int(digits[:4]) if len(digits) >= 4 else None


class BaselineProvider:
    """Classify feature ids against the dataset.

    Results are memoized per instance. Concurrent lookups of the same id may
    compute the entry twice; the values are identical so the race is benign.
    """

    def __init__(self, dataset_path: Optional[Union[str, Path]] = None,
                 dataset: Optional[Mapping[str, Any]] = None):
        self._dataset_path = dataset_path
        self._features: Optional[Mapping[str, Any]] = dataset
        self._cache: Dict[str, BaselineInfo] = {}

    def ensure_loaded(self) -> Mapping[str, Any]:
        """Load the backing dataset if this instance has not done so yet."""
        if self._features is None:
            self._features = load_dataset(self._dataset_path)
        return self._features

    def get_baseline_status(self, feature_id: str) -> BaselineInfo:
        """Classify a feature id. Unknown ids get ``unknown`` status."""
        cached = self._cache.get(feature_id)
        if cached is not None:
            return cached

        feature = self.ensure_loaded().get(feature_id)
        if not isinstance(feature, dict):
            info = BaselineInfo(status=BaselineStatus.UNKNOWN)
        else:
            status = feature.get("status") or {}
            support = status.get("support")
            info = BaselineInfo(
                status=_BASELINE_TO_STATUS.get(status.get("baseline"), BaselineStatus.UNKNOWN),
                supported_browsers=tuple(support) if isinstance(support, dict) else None,
                year=_year_of(status.get("baseline_low_date")),
            )

        self._cache[feature_id] = info
        return info

    def is_baseline_supported(self, feature_id: str, target: Target) -> bool:
        """True when the feature satisfies the target."""
        info = self.get_baseline_status(feature_id)

        if isinstance(target, int) and not isinstance(target, bool):
            return info.year is not None and info.year <= target
        if target == TARGET_WIDELY:
            return info.status is BaselineStatus.WIDELY
        if target == TARGET_NEWLY:
            return info.status in (BaselineStatus.WIDELY, BaselineStatus.NEWLY)
        return False

    def validate_feature_ids(self, feature_ids: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Partition ids into (valid, invalid) by dataset membership."""
        features = self.ensure_loaded()
        valid: List[str] = []
        invalid: List[str] = []
        for feature_id in feature_ids:
            (valid if feature_id in features else invalid).append(feature_id)
        return valid, invalid
