"""
CSS / SCSS analyzer.

tinycss2 is the primary parser. A stylesheet whose top level does not parse
(e.g. a trailing selector without a block) is re-read with cssutils, which
drops what it cannot understand and keeps the rest; positions from that path
are recovered by searching the source text.
"""

import logging
import re
from typing import Iterable, List, Tuple

import cssutils
import tinycss2

from ..checker_base import BaseAnalyzer
from ..models import Language
from ..utils import position_to_offset

logger = logging.getLogger(__name__)

TRACKED_PSEUDO_CLASSES = (
    ':has(', ':is(', ':where(', ':not(',
    ':focus-visible', ':focus-within', ':placeholder-shown',
    ':target', ':empty', ':first-child', ':last-child', ':only-child',
)

TRACKED_PROPERTIES = frozenset((
    # Layout
    'aspect-ratio', 'gap', 'row-gap', 'column-gap',
    'place-items', 'place-content', 'place-self',
    'inset', 'block-size', 'inline-size',
    'grid-template-areas', 'grid-template-columns', 'grid-template-rows',
    # Visual
    'backdrop-filter', 'mix-blend-mode', 'clip-path',
    'mask-image', 'object-fit', 'object-position', 'filter', 'opacity',
    # Scrolling
    'scroll-behavior', 'overscroll-behavior',
    'scroll-snap-type', 'scroll-snap-align', 'overflow-anchor',
    # Typography
    'text-wrap', 'text-decoration-thickness', 'text-underline-offset',
    'line-clamp', 'font-variant-caps', 'font-variant-numeric',
    'text-overflow', 'word-break',
    # Container queries
    'container-type', 'container-name', 'container',
    # Transforms & animations
    'transform', 'translate', 'rotate', 'scale', 'animation', 'transition',
))

TRACKED_FUNCTIONS = ('clamp', 'min', 'max', 'calc', 'var')
# A function name must not be the tail of a longer name (minmax( is not max().
_FUNCTION_RE = {name: re.compile(r'(?<![\w-])' + name + r'\(', re.IGNORECASE) for name in TRACKED_FUNCTIONS}

TRACKED_MEDIA_FEATURES = ('prefers-color-scheme', 'prefers-reduced-motion', 'prefers-contrast')

_AT_RULE_RE = re.compile(r'^@([-\w]+)\s*([^{;]*)')


class MalformedStylesheet(Exception):
    """The primary parser could not make sense of the stylesheet's top level."""


def pseudo_class_construct(token: str) -> str:
    """Registry spelling of a tracked pseudo-class token (':has(' -> ':has()')."""
    return token.replace('(', '()') if token.endswith('(') else token


def tracked_pseudo_classes(selector_text: str) -> List[str]:
    return [token for token in TRACKED_PSEUDO_CLASSES if token in selector_text]


def tracked_functions(value_text: str) -> List[str]:
    return [name for name in TRACKED_FUNCTIONS if _FUNCTION_RE[name].search(value_text)]


def tracked_media_features(prelude_text: str) -> List[str]:
    return [feature for feature in TRACKED_MEDIA_FEATURES if feature in prelude_text]


def _is_slash(token) -> bool:
    return token.type == 'literal' and token.value == '/'


def _strip_line_comments(tokens: List) -> List:
    """Remove ``// ...`` comments, up to the end of their line."""
    kept = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if (_is_slash(token) and following is not None and _is_slash(following)
                and following.source_line == token.source_line
                and following.source_column == token.source_column + 1):
            index += 2
            while index < len(tokens) and not (
                    tokens[index].type == 'whitespace' and '\n' in tokens[index].value):
                index += 1
            continue
        kept.append(token)
        index += 1
    return kept


class StylesheetAnalyzer(BaseAnalyzer):
    """Find tracked selectors, properties, functions and at-rules."""

    language = Language.STYLESHEET
    namespace = 'css'

    def _run_analysis(self):
        try:
            self._analyze_primary()
        except Exception as e:
            logger.warning("Failed to parse stylesheet %s (%s); retrying with fallback parser", self.file_path, e)
            self.evidence = []
            self._analyze_fallback()

    # Primary path (tinycss2)

    def _analyze_primary(self):
        rules = tinycss2.parse_stylesheet(self.content, skip_comments=True, skip_whitespace=True)
        for rule in rules:
            if rule.type == 'error':
                raise MalformedStylesheet(f"line {rule.source_line}: {rule.message}")
        self._walk(rules)

    def _walk(self, nodes: Iterable):
        for node in nodes:
            if node.type == 'qualified-rule':
                self._analyze_selector_list(node.prelude)
                self._walk(self._block_contents(node.content))
            elif node.type == 'at-rule':
                self._analyze_at_rule(node)
                if node.content is not None:
                    self._walk(self._block_contents(node.content))
            elif node.type == 'declaration':
                self._analyze_declaration(node)
            elif node.type == 'error':
                logger.debug("Skipping invalid construct in %s line %s: %s",
                             self.file_path, node.source_line, node.message)

    def _block_contents(self, tokens) -> List:
        return tinycss2.parse_blocks_contents(tokens, skip_comments=True, skip_whitespace=True)

    def _analyze_selector_list(self, prelude):
        for selector in self._split_selectors(self._selector_tokens(prelude)):
            text = tinycss2.serialize(selector).strip()
            start, end = self._token_span(selector)
            for token in tracked_pseudo_classes(text):
                feature_id = self._lookup(pseudo_class_construct(token))
                if feature_id:
                    self._add_evidence(start, end, text, feature_id,
                                       type='selector', selector=text, parser='tinycss2')

    def _analyze_declaration(self, decl):
        value = tinycss2.serialize(decl.value).strip()
        code = f"{decl.name}: {value}"
        start = self._offset(decl.source_line, decl.source_column)
        end = self._token_span(decl.value)[1] if decl.value else start + len(decl.name)

        if decl.name in TRACKED_PROPERTIES:
            feature_id = self._lookup(decl.name)
            if feature_id:
                self._add_evidence(start, end, code, feature_id,
                                   type='declaration', property=decl.name, value=value, parser='tinycss2')

        for name in tracked_functions(value):
            feature_id = self._lookup(name + '()')
            if feature_id:
                self._add_evidence(start, end, code, feature_id,
                                   type='function', property=decl.name, function=name + '()', parser='tinycss2')

    def _analyze_at_rule(self, rule):
        name = rule.lower_at_keyword
        prelude = tinycss2.serialize(rule.prelude).strip()
        start = self._offset(rule.source_line, rule.source_column)
        end = self._token_span(rule.prelude)[1] if rule.prelude else start + len(name) + 1

        if name == 'container':
            feature_id = self._lookup('container-query')
            if feature_id:
                self._add_evidence(start, end, f"@container {prelude}".strip(), feature_id,
                                   type='at-rule', name=name, params=prelude, parser='tinycss2')
        elif name == 'media':
            for feature in tracked_media_features(prelude):
                feature_id = self._lookup(feature)
                if feature_id:
                    self._add_evidence(start, end, f"@media {prelude}", feature_id,
                                       type='media-feature', feature=feature, parser='tinycss2')

    def _selector_tokens(self, prelude) -> List:
        """Prelude tokens that belong to the selector itself.

        SCSS variable declarations and line comments preceding a rule end up
        in its prelude; they are dropped.
        """
        tokens = list(prelude)
        if (self.file_path or "").lower().endswith('.scss'):
            tokens = _strip_line_comments(tokens)
        for index in range(len(tokens) - 1, -1, -1):
            if tokens[index].type == 'literal' and tokens[index].value == ';':
                return tokens[index + 1:]
        return tokens

    def _split_selectors(self, prelude) -> List[List]:
        selectors: List[List] = [[]]
        for token in prelude:
            if token.type == 'literal' and token.value == ',':
                selectors.append([])
            else:
                selectors[-1].append(token)
        return [self._strip_whitespace(s) for s in selectors if self._strip_whitespace(s)]

    @staticmethod
    def _strip_whitespace(tokens: List) -> List:
        start, end = 0, len(tokens)
        while start < end and tokens[start].type in ('whitespace', 'comment'):
            start += 1
        while end > start and tokens[end - 1].type in ('whitespace', 'comment'):
            end -= 1
        return tokens[start:end]

    def _token_span(self, tokens: List) -> Tuple[int, int]:
        tokens = self._strip_whitespace(list(tokens))
        if not tokens:
            return 0, 0
        first, last = tokens[0], tokens[-1]
        start = self._offset(first.source_line, first.source_column)
        end = self._offset(last.source_line, last.source_column) + len(tinycss2.serialize([last]))
        return start, end

    def _offset(self, line: int, column: int) -> int:
        return position_to_offset(line, column, self._line_starts)

    # Fallback path (cssutils)

    def _analyze_fallback(self):
        parser = cssutils.CSSParser(raiseExceptions=False, validate=False,
                                    loglevel=logging.CRITICAL, parseComments=False)
        sheet = parser.parseString(self.content)
        self._cursor = 0
        self._walk_fallback(sheet.cssRules)

    def _walk_fallback(self, rules):
        for rule in rules:
            if rule.type == rule.STYLE_RULE:
                self._fallback_style_rule(rule)
            elif rule.type == rule.MEDIA_RULE:
                self._fallback_at_rule('media', rule.media.mediaText)
                self._walk_fallback(rule.cssRules)
            else:
                match = _AT_RULE_RE.match(rule.cssText or "")
                if match:
                    self._fallback_at_rule(match.group(1).lower(), match.group(2).strip())

    def _fallback_style_rule(self, rule):
        for selector in rule.selectorList:
            text = selector.selectorText
            start, end = self._locate(text)
            for token in tracked_pseudo_classes(text):
                feature_id = self._lookup(pseudo_class_construct(token))
                if feature_id:
                    self._add_evidence(start, end, text, feature_id,
                                       type='selector', selector=text, parser='cssutils')

        for prop in rule.style.getProperties(all=True):
            name = prop.literalname
            value = prop.value
            code = f"{name}: {value}"
            start, end = self._locate(name)
            if name in TRACKED_PROPERTIES:
                feature_id = self._lookup(name)
                if feature_id:
                    self._add_evidence(start, end, code, feature_id,
                                       type='declaration', property=name, value=value, parser='cssutils')
            for function in tracked_functions(value):
                feature_id = self._lookup(function + '()')
                if feature_id:
                    self._add_evidence(start, end, code, feature_id,
                                       type='function', property=name, function=function + '()', parser='cssutils')

    def _fallback_at_rule(self, name: str, params: str):
        if name == 'container':
            feature_id = self._lookup('container-query')
            if feature_id:
                start, end = self._locate('@container')
                self._add_evidence(start, end, f"@container {params}".strip(), feature_id,
                                   type='at-rule', name=name, params=params, parser='cssutils')
        elif name == 'media':
            start, end = self._locate('@media')
            for feature in tracked_media_features(params):
                feature_id = self._lookup(feature)
                if feature_id:
                    self._add_evidence(start, end, f"@media {params}", feature_id,
                                       type='media-feature', feature=feature, parser='cssutils')

    def _locate(self, needle: str) -> Tuple[int, int]:
        """Find ``needle`` at or after the fallback cursor; 0:0 (line 1, col 1) when absent."""
        index = self.content.find(needle, self._cursor) if needle else -1
        if index == -1:
            index = self.content.find(needle) if needle else -1
        if index == -1:
            return 0, 0
        self._cursor = index + len(needle)
        return index, index + len(needle)
