"""
HTML / Angular component template analyzer.
"""

import logging
import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from ..checker_base import BaseAnalyzer
from ..models import Language

logger = logging.getLogger(__name__)

# name, optional "= value" in any of the three HTML quoting styles
_ATTRIBUTE_PATTERN = r'(?<=[\s/\'"]){name}(?:\s*=\s*(?:"[^"]*"|\'[^\']*\'|[^\s>]+))?(?=[\s/>]|$)'


def binding_target(attr_name: str) -> Optional[Tuple[str, str]]:
    """Resolve an attribute as written to (name, kind).

    ``[popover]``, ``[attr.popover]`` and ``bind-popover`` are property
    bindings of ``popover``; event bindings, structural directives, template
    references and class/style bindings are not feature constructs.
    """
    if attr_name.startswith('[') and attr_name.endswith(']') and not attr_name.startswith('[('):
        inner = attr_name[1:-1]
    elif attr_name.startswith('bind-'):
        inner = attr_name[len('bind-'):]
    elif attr_name[:1] in ('(', '*', '#', '[', '@'):
        return None
    else:
        return attr_name, 'attribute'

    if inner.startswith('attr.'):
        inner = inner[len('attr.'):]
    elif inner.startswith(('class.', 'style.')):
        return None
    return (inner, 'binding') if inner else None


class _ElementCollector(HTMLParser):
    """Collects start tags with their source offsets and raw text."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.elements: List[Tuple[str, Tuple[int, int], str, List[Tuple[str, Optional[str]]]]] = []

    def handle_starttag(self, tag, attrs):
        self.elements.append((tag, self.getpos(), self.get_starttag_text() or "", attrs))


class TemplateAnalyzer(BaseAnalyzer):
    """Find tracked HTML elements and attributes in templates."""

    language = Language.MARKUP
    namespace = 'html'

    def _run_analysis(self):
        collector = _ElementCollector()
        collector.feed(self.content)
        collector.close()

        for tag, (lineno, col), raw, attrs in collector.elements:
            start = self._line_starts[lineno - 1] + col if lineno - 1 < len(self._line_starts) else 0
            self._analyze_element(tag, start, raw, attrs)

    def _analyze_element(self, tag: str, start: int, raw: str, attrs):
        # The parser lowercases names; lookups use them as written.
        tag = raw[1:1 + len(tag)] or tag
        element_id = self._lookup(tag)
        if element_id == f'html.elements.{tag}':
            self._add_evidence(
                start, start + len(raw), raw, element_id,
                elementName=tag, kind='element',
            )

        cursor = 1 + len(tag)
        for attr_name, _value in attrs:
            match = re.compile(_ATTRIBUTE_PATTERN.format(name=re.escape(attr_name)), re.IGNORECASE).search(raw, cursor)
            if match:
                cursor = match.end()
                attr_name = match.group(0)[:len(attr_name)]
            target = binding_target(attr_name)
            if target is None:
                continue
            name, kind = target
            feature_id = self._lookup(name)
            # Element ids are reported for tags only, e.g. <table summary> is not <summary>.
            if not feature_id or feature_id == f'html.elements.{name}':
                continue
            if match:
                self._add_evidence(
                    start + match.start(), start + match.end(), match.group(0), feature_id,
                    elementName=tag, attributeName=name, kind=kind,
                )
            else:
                self._add_evidence(
                    start, start + len(raw), attr_name, feature_id,
                    elementName=tag, attributeName=name, kind=kind,
                )
