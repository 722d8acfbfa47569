"""
JavaScript/TypeScript analyzer built on tree-sitter.
"""

import logging
from typing import List, Optional, Set, Tuple

import tree_sitter_typescript
from tree_sitter import Language as Grammar
from tree_sitter import Node, Parser

from ..checker_base import BaseAnalyzer
from ..models import FeatureEvidence, Language
from ..utils import byte_to_char_offset
from .stylesheet_analyzer import StylesheetAnalyzer
from .template_analyzer import TemplateAnalyzer

logger = logging.getLogger(__name__)

TYPESCRIPT = Grammar(tree_sitter_typescript.language_typescript())
TSX = Grammar(tree_sitter_typescript.language_tsx())

# Identifiers below these nodes are type positions or import/export names.
NON_VALUE_CONTEXTS = {
    'type_annotation', 'type_arguments', 'type_parameters', 'type_query',
    'implements_clause', 'extends_type_clause', 'interface_declaration',
    'type_alias_declaration', 'generic_type', 'nested_type_identifier',
    'import_statement', 'export_specifier',
}

# Child fields that hold the "head" of an expression; a match on the parent
# suppresses matches on these.
_HEAD_FIELDS = {
    'call_expression': 'function',
    'new_expression': 'constructor',
    'member_expression': 'object',
}

_DECLARATION_NAME_PARENTS = {
    'variable_declarator', 'function_declaration', 'class_declaration',
    'function_expression', 'generator_function_declaration',
}

NodeKey = Tuple[int, int, str]


class MalformedScript(Exception):
    """The script contains syntax errors."""


def _key(node: Node) -> NodeKey:
    return (node.start_byte, node.end_byte, node.type)


def _first_error_line(root: Node) -> int:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed([child for child in node.children if child.has_error or child.is_missing]))
    return 1


class ScriptAnalyzer(BaseAnalyzer):
    """Find tracked web APIs in script files.

    Collected constructs: property-access chains, ``new X()`` on a bare
    identifier, bare identifier references and calls on property chains.
    Only the outermost matching node of one occurrence is recorded: a
    matching ``customElements.define(...)`` call hides its callee chain and
    a matching ``new IntersectionObserver()`` hides its constructor name.
    """

    language = Language.SCRIPT
    namespace = 'api'

    def __init__(self, inline_components: bool = True):
        super().__init__()
        self.inline_components = inline_components
        self._source = b""
        self._suppressed: Set[NodeKey] = set()

    def _run_analysis(self):
        self._source = self.content.encode('utf-8')
        self._suppressed = set()
        tree = self._parser().parse(self._source)
        root = tree.root_node
        if root.has_error:
            raise MalformedScript(f"syntax error near line {_first_error_line(root)}")

        stack = [root]
        while stack:
            node = stack.pop()
            self._visit(node)
            stack.extend(reversed(node.children))

    def _parser(self) -> Parser:
        grammar = TSX if (self.file_path or "").lower().endswith(('.tsx', '.jsx')) else TYPESCRIPT
        return Parser(grammar)

    def _visit(self, node: Node):
        kind = node.type
        if kind == 'decorator':
            if self.inline_components:
                self._analyze_inline_component(node)
            return
        if _key(node) in self._suppressed:
            return

        construct = None
        if kind == 'member_expression':
            construct = self._property_chain(node)
        elif kind == 'new_expression':
            constructor = node.child_by_field_name('constructor')
            if constructor is not None and constructor.type == 'identifier':
                construct = self._text(constructor)
        elif kind == 'call_expression':
            callee = node.child_by_field_name('function')
            if callee is not None and callee.type == 'member_expression':
                construct = self._property_chain(callee)
        elif kind == 'identifier' and self._is_value_reference(node):
            construct = self._text(node)

        if not construct:
            return
        feature_id = self._lookup(construct)
        if feature_id:
            self._suppress_head(node)
            self._record(node, construct, feature_id)

    def _property_chain(self, node: Node) -> Optional[str]:
        """Dotted path of a member chain rooted at an identifier, else None."""
        parts: List[str] = []
        current = node
        while current is not None and current.type == 'member_expression':
            prop = current.child_by_field_name('property')
            if prop is None:
                return None
            parts.append(self._text(prop))
            current = current.child_by_field_name('object')
        if current is None or current.type != 'identifier':
            return None
        parts.append(self._text(current))
        return '.'.join(reversed(parts))

    def _is_value_reference(self, node: Node) -> bool:
        parent = node.parent
        if parent is not None and parent.type in _DECLARATION_NAME_PARENTS:
            name = parent.child_by_field_name('name')
            if name is not None and _key(name) == _key(node):
                return False
        ancestor = parent
        while ancestor is not None:
            if ancestor.type in NON_VALUE_CONTEXTS:
                return False
            ancestor = ancestor.parent
        return True

    def _suppress_head(self, node: Node):
        current = node
        while current is not None:
            field_name = _HEAD_FIELDS.get(current.type)
            if field_name is None:
                return
            current = current.child_by_field_name(field_name)
            if current is not None:
                self._suppressed.add(_key(current))

    def _record(self, node: Node, construct: str, feature_id: str):
        start = byte_to_char_offset(self._source, node.start_byte)
        end = byte_to_char_offset(self._source, node.end_byte)
        self._add_evidence(
            start, end, self.content[start:end], feature_id,
            constructName=construct, nodeKind=node.type,
        )

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')

    # Inline Angular component metadata

    def _analyze_inline_component(self, decorator: Node):
        call = next((c for c in decorator.named_children if c.type == 'call_expression'), None)
        if call is None:
            return
        callee = call.child_by_field_name('function')
        if callee is None or self._text(callee) != 'Component':
            return
        arguments = call.child_by_field_name('arguments')
        metadata = next((c for c in arguments.named_children if c.type == 'object'), None) if arguments else None
        if metadata is None:
            return

        for pair in metadata.named_children:
            if pair.type != 'pair':
                continue
            key = pair.child_by_field_name('key')
            value = pair.child_by_field_name('value')
            if key is None or value is None:
                continue
            name = self._text(key).strip('\'"')
            if name == 'template':
                for literal in self._string_literals(value):
                    self._analyze_embedded(literal, 'template')
            elif name == 'styles':
                for literal in self._string_literals(value):
                    self._analyze_embedded(literal, 'styles')

    def _string_literals(self, node: Node) -> List[Node]:
        if node.type in ('string', 'template_string'):
            return [node]
        if node.type == 'array':
            return [c for c in node.named_children if c.type in ('string', 'template_string')]
        return []

    def _analyze_embedded(self, literal: Node, kind: str):
        start = byte_to_char_offset(self._source, literal.start_byte) + 1
        end = byte_to_char_offset(self._source, literal.end_byte) - 1
        if end <= start:
            return
        snippet = self.content[start:end]
        analyzer = TemplateAnalyzer() if kind == 'template' else StylesheetAnalyzer()
        origin = self._position(start)
        found: List[FeatureEvidence] = analyzer.analyze(self.file_path or "", snippet)
        for item in found:
            self.evidence.append(item.shifted(origin.line - 1, origin.col - 1))
