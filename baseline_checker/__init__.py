"""
Baseline compatibility checker for web application sources.
"""

__version__ = "0.1.0"

from .baseline_provider import BaselineProvider
from .feature_mapper import FeatureMapper
from .feature_registry import FEATURE_ID_REGISTRY, get_all_features, get_feature_id
from .main_checker import AnalyzerOptions, BaselineChecker
from .models import (
    AnalysisReport,
    BaselineConfig,
    BaselineInfo,
    BaselineStatus,
    Diagnostic,
    FeatureEvidence,
    Language,
    Position,
    Range,
    Severity,
    Suggestion,
    Summary,
)
from .reporter import ReportGenerator

__all__ = [
    '__version__',
    'AnalysisReport',
    'AnalyzerOptions',
    'BaselineChecker',
    'BaselineConfig',
    'BaselineInfo',
    'BaselineProvider',
    'BaselineStatus',
    'Diagnostic',
    'FEATURE_ID_REGISTRY',
    'FeatureEvidence',
    'FeatureMapper',
    'Language',
    'Position',
    'Range',
    'ReportGenerator',
    'Severity',
    'Suggestion',
    'Summary',
    'get_all_features',
    'get_feature_id',
]
