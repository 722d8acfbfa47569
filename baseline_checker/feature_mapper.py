"""
Turn feature evidence into severity-graded diagnostics.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from .baseline_provider import BaselineProvider
from .models import (
    TARGET_WIDELY,
    BaselineConfig,
    BaselineStatus,
    Diagnostic,
    FeatureEvidence,
    Severity,
    Suggestion,
    Target,
)
from .utils import trailing_segment

logger = logging.getLogger(__name__)

SUGGESTIONS: Dict[str, Tuple[Suggestion, ...]] = {
    # CSS selectors
    'css.selectors.has': (Suggestion(
        'Use @supports feature detection',
        '@supports selector(:has(*)) { /* your styles */ }',
        'Wrap :has() selectors in @supports for graceful degradation',
    ),),
    'css.selectors.focus-visible': (Suggestion(
        'Use :focus as fallback',
        ':focus { /* fallback */ }\n:focus-visible { /* enhanced */ }',
        'Progressive enhancement with standard :focus',
    ),),

    # CSS properties
    'css.properties.text-wrap': (Suggestion(
        'Use overflow-wrap as fallback',
        'overflow-wrap: break-word;\ntext-wrap: balance;',
        'Provide traditional overflow handling',
    ),),
    'css.properties.aspect-ratio': (Suggestion(
        'Use padding-bottom technique',
        'padding-bottom: 56.25%; /* 16:9 aspect ratio */',
        'Classic padding hack works in all browsers',
    ),),
    'css.properties.backdrop-filter': (Suggestion(
        'Provide solid background fallback',
        'background: rgba(255,255,255,0.95);\nbackdrop-filter: blur(10px);',
        'Use semi-transparent background for browsers without backdrop-filter',
    ),),

    # Observers
    'api.IntersectionObserver': (Suggestion(
        'Use polyfill or feature detection',
        "if ('IntersectionObserver' in window) { /* use it */ }",
        'w3c/IntersectionObserver polyfill available on npm',
    ),),
    'api.ResizeObserver': (Suggestion(
        'Use resize event as fallback',
        "window.addEventListener('resize', handler);",
        'Less performant but more compatible',
    ),),

    # Modern DOM APIs
    'api.Document.startViewTransition': (Suggestion(
        'Add feature detection',
        "if ('startViewTransition' in document) {\n"
        "  document.startViewTransition(() => {});\n"
        "} else {\n"
        "  // instant update\n"
        "}",
        'Gracefully degrade to instant updates',
    ),),
    'api.structuredClone': (Suggestion(
        'Use JSON.parse/stringify fallback',
        'const clone = structuredClone ? structuredClone(obj) : JSON.parse(JSON.stringify(obj));',
        'JSON method works for simple objects',
    ),),
    'api.Window.requestIdleCallback': (Suggestion(
        'Use setTimeout as fallback',
        'const rIC = window.requestIdleCallback || ((cb) => setTimeout(cb, 1));',
        'setTimeout provides basic deferral',
    ),),

    # Navigator
    'api.Navigator.clipboard': (Suggestion(
        'Use execCommand as fallback',
        "if (navigator.clipboard) {\n"
        "  navigator.clipboard.writeText(text);\n"
        "} else {\n"
        "  document.execCommand('copy');\n"
        "}",
        'execCommand is deprecated but widely supported',
    ),),
    'api.Navigator.share': (Suggestion(
        'Provide manual share buttons',
        note='Show Twitter/Facebook share buttons when Web Share API unavailable',
    ),),

    # HTML
    'html.elements.dialog': (Suggestion(
        'Use dialog polyfill',
        note='GoogleChrome/dialog-polyfill provides good compatibility',
    ),),

    # Network
    'api.fetch': (Suggestion(
        'Use fetch polyfill',
        note='whatwg-fetch polyfill works in older browsers',
    ),),
    'api.AbortController': (Suggestion(
        'Handle cancellation manually',
        note='Use custom cancellation tokens for older browsers',
    ),),
}

CONTAINER_QUERY_SUGGESTION = Suggestion(
    'Use media queries as fallback',
    '@media (min-width: 768px) { /* styles */ }',
    'Container queries not widely supported; use viewport-based media queries',
)

STORAGE_SUGGESTION = Suggestion(
    'Use try-catch with fallback',
    'try {\n  localStorage.setItem(key, value);\n} catch {\n  // in-memory fallback\n}',
    'Storage can fail in private browsing mode',
)

POPOVER_SUGGESTION = Suggestion(
    'Use JavaScript show/hide',
    "element.classList.toggle('visible');",
    'Implement popover with CSS classes and JavaScript',
)

STATUS_SUGGESTIONS: Dict[BaselineStatus, Suggestion] = {
    BaselineStatus.LIMITED: Suggestion(
        'Provide fallback or polyfill',
        note='This feature has limited browser support. Consider alternatives or progressive enhancement.',
    ),
    BaselineStatus.NEWLY: Suggestion(
        'Use feature detection',
        "if ('feature' in object) { /* use it */ }",
        'Wrap usage in feature detection for broader compatibility',
    ),
    BaselineStatus.UNKNOWN: Suggestion(
        'Verify browser support',
        note='Check MDN or caniuse.com for compatibility information',
    ),
}


def get_severity(status: BaselineStatus, strict: bool) -> Severity:
    if strict:
        return Severity.ERROR if status in (BaselineStatus.LIMITED, BaselineStatus.UNKNOWN) else Severity.WARN
    if status in (BaselineStatus.LIMITED, BaselineStatus.UNKNOWN):
        return Severity.WARN
    return Severity.INFO


def create_message(feature_id: str, status: BaselineStatus, target: Target) -> str:
    feature = trailing_segment(feature_id)

    if status is BaselineStatus.LIMITED:
        return f"Feature '{feature}' has limited browser support and is not compatible with target '{target}'"
    if status is BaselineStatus.UNKNOWN:
        return f"Feature '{feature}' has unknown compatibility status (target '{target}')"
    if status is BaselineStatus.NEWLY:
        if target == TARGET_WIDELY:
            return f"Feature '{feature}' is newly available in Baseline but target requires 'widely' available features"
        return f"Feature '{feature}' is newly available but may not be compatible with target '{target}'"
    return f"Feature '{feature}' may not be compatible with target '{target}'"


def get_suggestions(feature_id: str, status: BaselineStatus) -> Tuple[Suggestion, ...]:
    """Remediation hints: exact id first, then family rules, then by status."""
    if feature_id in SUGGESTIONS:
        return SUGGESTIONS[feature_id]
    if feature_id.startswith(('css.properties.container', 'css.at-rules.container')):
        return (CONTAINER_QUERY_SUGGESTION,)
    if 'localStorage' in feature_id or 'sessionStorage' in feature_id:
        return (STORAGE_SUGGESTION,)
    if 'popover' in feature_id:
        return (POPOVER_SUGGESTION,)
    fallback = STATUS_SUGGESTIONS.get(status)
    return (fallback,) if fallback else ()


class FeatureMapper:
    """Apply a run's policy to evidence using a BaselineProvider."""

    def __init__(self, provider: BaselineProvider):
        self.provider = provider

    def map_evidence_to_diagnostics(self, evidence: Iterable[FeatureEvidence],
                                    config: BaselineConfig) -> List[Diagnostic]:
        """One diagnostic per evidence item that fails the target, in input order.

        Allow-listed ids and supported features produce nothing. An item that
        cannot be classified is logged and skipped.
        """
        diagnostics: List[Diagnostic] = []
        for item in evidence:
            if item.feature_id in config.allow:
                continue
            try:
                diagnostic = self._map_item(item, config)
            except Exception as e:
                logger.warning("Failed to classify %s in %s: %s", item.feature_id, item.file, e)
                continue
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def _map_item(self, item: FeatureEvidence, config: BaselineConfig):
        info = self.provider.get_baseline_status(item.feature_id)
        if self.provider.is_baseline_supported(item.feature_id, config.target):
            return None
        return Diagnostic(
            severity=get_severity(info.status, config.strict),
            message=create_message(item.feature_id, info.status, config.target),
            feature_id=item.feature_id,
            baseline=info.status,
            file=item.file,
            range=item.range,
            suggestions=get_suggestions(item.feature_id, info.status),
        )
