"""
Registry mapping syntactic constructs to canonical web-feature identifiers.

Keys are exact source tokens: dotted property-access chains, bare globals,
CSS selector tokens with a literal ``()`` marker for parameterized
pseudo-classes, CSS property/at-rule names and HTML attribute/element names.
Lookups never normalize, case-fold or partially match.
"""

from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

_ENTRIES: Tuple[Tuple[str, str], ...] = (
    # Observers
    ("IntersectionObserver", "api.IntersectionObserver"),
    ("ResizeObserver", "api.ResizeObserver"),
    ("MutationObserver", "api.MutationObserver"),
    ("PerformanceObserver", "api.PerformanceObserver"),

    # DOM & document
    ("document.startViewTransition", "api.Document.startViewTransition"),
    ("Element.prototype.animate", "api.Element.animate"),
    ("Element.prototype.scrollIntoView", "api.Element.scrollIntoView"),
    ("document.querySelector", "api.Document.querySelector"),
    ("document.querySelectorAll", "api.Document.querySelectorAll"),
    ("requestIdleCallback", "api.Window.requestIdleCallback"),
    ("structuredClone", "api.structuredClone"),
    ("queueMicrotask", "api.queueMicrotask"),

    # Storage & data
    ("navigator.clipboard", "api.Navigator.clipboard"),
    ("localStorage", "api.Window.localStorage"),
    ("sessionStorage", "api.Window.sessionStorage"),
    ("IndexedDB", "api.IDBFactory"),
    ("indexedDB", "api.IDBFactory"),
    ("Cache", "api.Cache"),
    ("CacheStorage", "api.CacheStorage"),

    # Navigator & device
    ("navigator.share", "api.Navigator.share"),
    ("navigator.vibrate", "api.Navigator.vibrate"),
    ("navigator.getBattery", "api.Navigator.getBattery"),
    ("navigator.mediaDevices.getUserMedia", "api.MediaDevices.getUserMedia"),
    ("navigator.geolocation", "api.Geolocation"),
    ("navigator.onLine", "api.Navigator.onLine"),
    ("navigator.serviceWorker", "api.Navigator.serviceWorker"),

    # Web components
    ("customElements.define", "api.CustomElementRegistry.define"),
    ("ShadowRoot", "api.ShadowRoot"),
    ("HTMLSlotElement", "api.HTMLSlotElement"),
    ("attachShadow", "api.Element.attachShadow"),

    # Fetch & network
    ("fetch", "api.fetch"),
    ("Request", "api.Request"),
    ("Response", "api.Response"),
    ("Headers", "api.Headers"),
    ("AbortController", "api.AbortController"),
    ("WebSocket", "api.WebSocket"),

    # Graphics & canvas
    ("OffscreenCanvas", "api.OffscreenCanvas"),
    ("ImageBitmap", "api.ImageBitmap"),
    ("createImageBitmap", "api.createImageBitmap"),
    ("requestAnimationFrame", "api.Window.requestAnimationFrame"),

    # Audio & video
    ("HTMLMediaElement", "api.HTMLMediaElement"),
    ("HTMLVideoElement", "api.HTMLVideoElement"),
    ("HTMLAudioElement", "api.HTMLAudioElement"),
    ("MediaRecorder", "api.MediaRecorder"),
    ("AudioContext", "api.AudioContext"),

    # Forms & input
    ("FormData", "api.FormData"),
    ("URLSearchParams", "api.URLSearchParams"),
    ("ValidityState", "api.ValidityState"),

    # Crypto
    ("crypto.randomUUID", "api.Crypto.randomUUID"),
    ("crypto.subtle", "api.SubtleCrypto"),

    # Performance & timing
    ("performance.now", "api.Performance.now"),
    ("PerformanceNavigationTiming", "api.PerformanceNavigationTiming"),

    # HTML elements & attributes
    ("popover", "html.elements.div.popover"),
    ("inert", "html.global_attributes.inert"),
    ("loading", "html.elements.img.loading"),
    ("dialog", "html.elements.dialog"),
    ("details", "html.elements.details"),
    ("summary", "html.elements.summary"),
    ("contenteditable", "html.global_attributes.contenteditable"),
    ("enterkeyhint", "html.global_attributes.enterkeyhint"),
    ("inputmode", "html.global_attributes.inputmode"),
    ("hidden", "html.global_attributes.hidden"),
    ("draggable", "html.global_attributes.draggable"),

    # CSS selectors
    (":has()", "css.selectors.has"),
    (":is()", "css.selectors.is"),
    (":where()", "css.selectors.where"),
    (":not()", "css.selectors.not"),
    (":focus-visible", "css.selectors.focus-visible"),
    (":focus-within", "css.selectors.focus-within"),
    (":placeholder-shown", "css.selectors.placeholder-shown"),
    (":target", "css.selectors.target"),
    (":empty", "css.selectors.empty"),
    (":first-child", "css.selectors.first-child"),
    (":last-child", "css.selectors.last-child"),
    (":only-child", "css.selectors.only-child"),

    # CSS layout
    ("aspect-ratio", "css.properties.aspect-ratio"),
    ("gap", "css.properties.gap"),
    ("row-gap", "css.properties.row-gap"),
    ("column-gap", "css.properties.column-gap"),
    ("place-items", "css.properties.place-items"),
    ("place-content", "css.properties.place-content"),
    ("place-self", "css.properties.place-self"),
    ("inset", "css.properties.inset"),
    ("block-size", "css.properties.block-size"),
    ("inline-size", "css.properties.inline-size"),
    ("grid-template-areas", "css.properties.grid-template-areas"),
    ("grid-template-columns", "css.properties.grid-template-columns"),
    ("grid-template-rows", "css.properties.grid-template-rows"),

    # CSS visual
    ("backdrop-filter", "css.properties.backdrop-filter"),
    ("mix-blend-mode", "css.properties.mix-blend-mode"),
    ("clip-path", "css.properties.clip-path"),
    ("mask-image", "css.properties.mask-image"),
    ("object-fit", "css.properties.object-fit"),
    ("object-position", "css.properties.object-position"),
    ("filter", "css.properties.filter"),
    ("opacity", "css.properties.opacity"),

    # CSS scrolling & overflow
    ("scroll-behavior", "css.properties.scroll-behavior"),
    ("overscroll-behavior", "css.properties.overscroll-behavior"),
    ("scroll-snap-type", "css.properties.scroll-snap-type"),
    ("scroll-snap-align", "css.properties.scroll-snap-align"),
    ("overflow-anchor", "css.properties.overflow-anchor"),

    # CSS typography
    ("text-wrap", "css.properties.text-wrap"),
    ("text-decoration-thickness", "css.properties.text-decoration-thickness"),
    ("text-underline-offset", "css.properties.text-underline-offset"),
    ("line-clamp", "css.properties.line-clamp"),
    ("font-variant-caps", "css.properties.font-variant-caps"),
    ("font-variant-numeric", "css.properties.font-variant-numeric"),
    ("text-overflow", "css.properties.text-overflow"),
    ("word-break", "css.properties.word-break"),

    # CSS container queries
    ("container-query", "css.at-rules.container"),
    ("container-type", "css.properties.container-type"),
    ("container-name", "css.properties.container-name"),
    ("container", "css.properties.container"),

    # CSS functions
    ("clamp()", "css.types.clamp"),
    ("min()", "css.types.min"),
    ("max()", "css.types.max"),
    ("calc()", "css.types.calc"),
    ("var()", "css.properties.custom-property"),

    # CSS transforms & animations
    ("transform", "css.properties.transform"),
    ("translate", "css.properties.translate"),
    ("rotate", "css.properties.rotate"),
    ("scale", "css.properties.scale"),
    ("animation", "css.properties.animation"),
    ("transition", "css.properties.transition"),

    # CSS media features
    ("prefers-color-scheme", "css.at-rules.media.prefers-color-scheme"),
    ("prefers-reduced-motion", "css.at-rules.media.prefers-reduced-motion"),
    ("prefers-contrast", "css.at-rules.media.prefers-contrast"),
)

FEATURE_ID_REGISTRY: Mapping[str, str] = MappingProxyType(dict(_ENTRIES))


def get_feature_id(construct: str, namespace: Optional[str] = None) -> Optional[str]:
    """Exact-match lookup of a construct.

    With ``namespace`` ("api", "html" or "css") only identifiers under that
    namespace are returned, so e.g. a script variable named ``gap`` does not
    resolve to the CSS ``gap`` property.
    """
    feature_id = FEATURE_ID_REGISTRY.get(construct)
    if feature_id is None:
        return None
    if namespace is not None and not feature_id.startswith(namespace + "."):
        return None
    return feature_id


def get_all_features() -> List[Tuple[str, str]]:
    """All (construct, feature_id) pairs in registry order."""
    return list(FEATURE_ID_REGISTRY.items())


def get_all_feature_ids() -> List[str]:
    """Distinct feature ids in registry order."""
    return list(dict.fromkeys(FEATURE_ID_REGISTRY.values()))
