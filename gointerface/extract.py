"""Extraction visitor: one syntax tree in, one compilation unit model out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import MalformedUnitError
from .logging import get_logger
from .models import CompilationUnitModel, ImportRecord, MethodRecord, ReceiverDescriptor, is_exported
from .syntax.nodes import (
    ImportNode,
    MethodNode,
    PackageNode,
    ParameterNode,
    ReceiverNode,
    SignatureNode,
    SyntaxNode,
    SyntaxTree,
    TokenStream,
    children_of,
)

BLANK_IDENTIFIER = "_"
POINTER_MARKER = "*"

_logger = get_logger("extract")


@dataclass
class _PendingMethod:
    identifier: str
    leading_comment_text: str
    signature_text: Optional[str] = None
    type_name: Optional[str] = None
    is_reference_receiver: bool = False


@dataclass
class _WalkState:
    """Traversal context threaded through the walk of a single tree."""

    tokens: TokenStream
    include_unexported: bool
    source: Optional[str]
    package_name: Optional[str] = None
    imports: List[ImportRecord] = field(default_factory=list)
    methods: List[MethodRecord] = field(default_factory=list)
    current_method: Optional[_PendingMethod] = None
    in_receiver: bool = False


def extract(tree: SyntaxTree, *, include_unexported: bool = False) -> CompilationUnitModel:
    """Walk `tree` once and return the unit's package, imports and methods.

    Unexported methods are skipped entirely unless `include_unexported` is set.
    Raises `MalformedUnitError` if the unit has no package clause or a method
    declaration lacks its signature or receiver.
    """
    state = _WalkState(
        tokens=tree.tokens,
        include_unexported=include_unexported,
        source=tree.source_name,
    )
    _walk(tree.root, state)

    if not state.package_name:
        raise MalformedUnitError(state.source, "missing package clause")

    _logger.debug(
        "Extracted %d imports and %d methods from %s",
        len(state.imports),
        len(state.methods),
        state.source or "<source>",
    )
    return CompilationUnitModel(
        package_name=state.package_name,
        imports=tuple(state.imports),
        methods=tuple(state.methods),
        source=state.source,
    )


def _walk(node: SyntaxNode, state: _WalkState) -> None:
    if not _enter(node, state):
        return
    for child in children_of(node):
        _walk(child, state)
    _exit(node, state)


def _enter(node: SyntaxNode, state: _WalkState) -> bool:
    """Handle entry into `node`; returning False skips its subtree."""
    if isinstance(node, PackageNode):
        state.package_name = node.name
    elif isinstance(node, ImportNode):
        _enter_import(node, state)
    elif isinstance(node, MethodNode):
        return _enter_method(node, state)
    elif isinstance(node, ReceiverNode):
        state.in_receiver = state.current_method is not None
    elif isinstance(node, SignatureNode):
        if state.current_method is not None:
            state.current_method.signature_text = state.tokens.text(node.start, node.stop)
    elif isinstance(node, ParameterNode):
        _enter_parameter(node, state)
    return True


def _exit(node: SyntaxNode, state: _WalkState) -> None:
    if isinstance(node, ReceiverNode):
        state.in_receiver = False
    elif isinstance(node, MethodNode):
        _exit_method(state)


def _enter_import(node: ImportNode, state: _WalkState) -> None:
    alias = node.alias or ""
    if alias == BLANK_IDENTIFIER:
        # side-effect imports bring no symbol into the generated file
        return
    state.imports.append(ImportRecord(alias=alias, path=node.path))


def _enter_method(node: MethodNode, state: _WalkState) -> bool:
    if not node.identifier:
        raise MalformedUnitError(state.source, "method declaration without a name")
    if not state.include_unexported and not is_exported(node.identifier):
        _logger.debug("Skipping unexported method %s", node.identifier)
        return False

    hidden = state.tokens.hidden_tokens_to_left(node.start)
    state.current_method = _PendingMethod(
        identifier=node.identifier,
        leading_comment_text="".join(token.text for token in hidden),
    )
    return True


def _enter_parameter(node: ParameterNode, state: _WalkState) -> None:
    pending = state.current_method
    if not state.in_receiver or pending is None:
        return
    type_text = state.tokens.significant_text(node.type_start, node.type_stop)
    if type_text.startswith(POINTER_MARKER):
        pending.type_name = type_text[1:]
        pending.is_reference_receiver = True
    else:
        pending.type_name = type_text
        pending.is_reference_receiver = False


def _exit_method(state: _WalkState) -> None:
    pending = state.current_method
    if pending is None:
        return
    state.current_method = None
    state.in_receiver = False

    if pending.signature_text is None:
        raise MalformedUnitError(state.source, f"method {pending.identifier} has no signature")
    if not pending.type_name:
        raise MalformedUnitError(state.source, f"method {pending.identifier} has no receiver")

    state.methods.append(
        MethodRecord(
            receiver=ReceiverDescriptor(
                type_name=pending.type_name,
                is_reference_receiver=pending.is_reference_receiver,
            ),
            identifier=pending.identifier,
            signature_text=pending.signature_text,
            leading_comment_text=pending.leading_comment_text,
        )
    )


__all__ = ["BLANK_IDENTIFIER", "POINTER_MARKER", "extract"]
