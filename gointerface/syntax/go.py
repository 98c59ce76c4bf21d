"""Tree-sitter powered Go syntax adapter."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Iterator, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import MalformedUnitError
from ..logging import get_logger
from .nodes import (
    ImportNode,
    MethodNode,
    PackageNode,
    ParameterNode,
    ReceiverNode,
    SignatureNode,
    SourceFileNode,
    SyntaxNode,
    SyntaxTree,
    Token,
    TokenStream,
)

_GO_LANGUAGE: Optional[Language] = None

_PARAMETER_TYPES = {"parameter_declaration", "variadic_parameter_declaration"}


def go_language() -> Language:
    """Return the shared tree-sitter Go language handle."""
    global _GO_LANGUAGE
    if _GO_LANGUAGE is None:
        _GO_LANGUAGE = Language(tree_sitter_go.language())
    return _GO_LANGUAGE


def first_syntax_error(node: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in document order, if any."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = first_syntax_error(child)
        if found is not None:
            return found
    return node


class GoSyntaxAdapter:
    """Parses Go source and projects it onto the gointerface syntax tree."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None
        self.logger = get_logger("syntax.go")

    def parse(self, source: str, source_name: Optional[str] = None) -> SyntaxTree:
        source_bytes = source.encode("utf-8")
        tree = self._get_parser().parse(source_bytes)
        root = tree.root_node

        error = first_syntax_error(root)
        if error is not None:
            line, column = error.start_point
            raise MalformedUnitError(
                source_name, f"syntax error at line {line + 1}, column {column + 1}"
            )

        builder = _TokenIndex(source_bytes, root)
        tokens = builder.stream()
        source_file = SourceFileNode(start=0, stop=len(tokens) - 1)
        for child in root.children:
            source_file.children.extend(self._project(child, builder))

        self.logger.debug(
            "Parsed %s into %d tokens and %d top-level nodes",
            source_name or "<source>",
            len(tokens),
            len(source_file.children),
        )
        return SyntaxTree(root=source_file, tokens=tokens, source_name=source_name)

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(go_language())
        return self._parser

    def _project(self, node: Node, index: "_TokenIndex") -> Iterator[SyntaxNode]:
        if node.type == "package_clause":
            name = _first_child_of_type(node, "package_identifier")
            if name is not None:
                start, stop = index.span(node)
                yield PackageNode(start=start, stop=stop, name=index.node_text(name))
        elif node.type == "import_declaration":
            for spec in _descendants_of_type(node, "import_spec"):
                yield self._import_node(spec, index)
        elif node.type == "method_declaration":
            yield self._method_node(node, index)

    @staticmethod
    def _import_node(spec: Node, index: "_TokenIndex") -> ImportNode:
        start, stop = index.span(spec)
        name = spec.child_by_field_name("name")
        path = spec.child_by_field_name("path")
        return ImportNode(
            start=start,
            stop=stop,
            path=index.node_text(path) if path is not None else "",
            alias=index.node_text(name) if name is not None else None,
        )

    def _method_node(self, node: Node, index: "_TokenIndex") -> MethodNode:
        start, stop = index.span(node)
        name = node.child_by_field_name("name")
        method = MethodNode(
            start=start,
            stop=stop,
            identifier=index.node_text(name) if name is not None else "",
        )

        receiver = node.child_by_field_name("receiver")
        if receiver is not None:
            r_start, r_stop = index.span(receiver)
            method.children.append(
                ReceiverNode(start=r_start, stop=r_stop, children=_parameters(receiver, index))
            )

        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            result = node.child_by_field_name("result")
            last = result if result is not None else parameters
            s_start, _ = index.span(parameters)
            _, s_stop = index.span(last)
            method.children.append(
                SignatureNode(start=s_start, stop=s_stop, children=_parameters(parameters, index))
            )
        return method


class _TokenIndex:
    """Flattens tree-sitter leaves into a token stream and maps nodes onto it."""

    def __init__(self, source_bytes: bytes, root: Node) -> None:
        self._source = source_bytes
        parts: List[Tuple[str, bool]] = []
        self._starts: List[int] = []
        self._ends: List[int] = []

        cursor = 0
        for leaf in _leaves(root):
            if leaf.end_byte <= leaf.start_byte or leaf.start_byte < cursor:
                continue
            if leaf.start_byte > cursor:
                self._append(parts, cursor, leaf.start_byte, None)
            self._append(parts, leaf.start_byte, leaf.end_byte, leaf.type == "comment")
            cursor = leaf.end_byte
        if cursor < len(source_bytes):
            self._append(parts, cursor, len(source_bytes), None)

        self._stream = TokenStream.from_texts(parts)

    def _append(
        self, parts: List[Tuple[str, bool]], start: int, end: int, comment: Optional[bool]
    ) -> None:
        text = self._source[start:end].decode("utf-8", errors="replace")
        hidden = bool(comment) or not text.strip()
        parts.append((text, hidden))
        self._starts.append(start)
        self._ends.append(end)

    def stream(self) -> TokenStream:
        return self._stream

    def span(self, node: Node) -> Tuple[int, int]:
        """Return the first and last significant token indices covered by `node`."""
        first = bisect_left(self._starts, node.start_byte)
        last = bisect_right(self._ends, node.end_byte) - 1
        while first < last and self._token(first).hidden:
            first += 1
        while last > first and self._token(last).hidden:
            last -= 1
        return first, last

    def node_text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _token(self, index: int) -> Token:
        return self._stream[index]


def _leaves(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.child_count == 0:
            yield node
        else:
            stack.extend(reversed(node.children))


def _first_child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _descendants_of_type(node: Node, node_type: str) -> Iterator[Node]:
    for child in node.children:
        if child.type == node_type:
            yield child
        else:
            yield from _descendants_of_type(child, node_type)


def _parameters(parameter_list: Node, index: _TokenIndex) -> List[ParameterNode]:
    params: List[ParameterNode] = []
    for child in parameter_list.named_children:
        if child.type not in _PARAMETER_TYPES:
            continue
        type_node = child.child_by_field_name("type")
        if type_node is None:
            type_node = child
        start, stop = index.span(child)
        type_start, type_stop = index.span(type_node)
        params.append(
            ParameterNode(start=start, stop=stop, type_start=type_start, type_stop=type_stop)
        )
    return params


def parse_go(source: str, source_name: Optional[str] = None) -> SyntaxTree:
    """Parse one Go compilation unit into a `SyntaxTree`."""
    return GoSyntaxAdapter().parse(source, source_name)


__all__ = ["GoSyntaxAdapter", "first_syntax_error", "go_language", "parse_go"]
