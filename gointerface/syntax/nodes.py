"""Language-neutral syntax tree consumed by the extraction visitor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union


@dataclass(frozen=True)
class Token:
    """A lexical token; hidden tokens are comments and whitespace."""

    index: int
    text: str
    hidden: bool = False


class TokenStream:
    """Ordered tokens of one source file, significant and hidden alike."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = list(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    @classmethod
    def from_texts(cls, parts: Sequence[tuple[str, bool]]) -> "TokenStream":
        """Build a stream from `(text, hidden)` pairs in source order."""
        return cls([Token(index=i, text=text, hidden=hidden) for i, (text, hidden) in enumerate(parts)])

    def hidden_tokens_to_left(self, index: int) -> List[Token]:
        """Return the contiguous run of hidden tokens ending just before `index`."""
        start = index
        while start > 0 and self._tokens[start - 1].hidden:
            start -= 1
        return self._tokens[start:index]

    def text(self, start: int, stop: int) -> str:
        """Return verbatim text from token `start` through token `stop` inclusive."""
        if start < 0 or stop >= len(self._tokens) or stop < start:
            return ""
        return "".join(token.text for token in self._tokens[start : stop + 1])

    def significant_text(self, start: int, stop: int) -> str:
        """Return the text of the significant tokens in the range, without separators."""
        if start < 0 or stop >= len(self._tokens) or stop < start:
            return ""
        return "".join(token.text for token in self._tokens[start : stop + 1] if not token.hidden)


@dataclass
class ParameterNode:
    start: int
    stop: int
    type_start: int
    type_stop: int


@dataclass
class ReceiverNode:
    start: int
    stop: int
    children: List[ParameterNode] = field(default_factory=list)


@dataclass
class SignatureNode:
    start: int
    stop: int
    children: List[ParameterNode] = field(default_factory=list)


@dataclass
class MethodNode:
    start: int
    stop: int
    identifier: str
    children: List[Union[ReceiverNode, SignatureNode]] = field(default_factory=list)


@dataclass
class ImportNode:
    start: int
    stop: int
    path: str
    alias: Optional[str] = None


@dataclass
class PackageNode:
    start: int
    stop: int
    name: str


SyntaxNode = Union[
    "SourceFileNode",
    PackageNode,
    ImportNode,
    MethodNode,
    ReceiverNode,
    SignatureNode,
    ParameterNode,
]


@dataclass
class SourceFileNode:
    start: int
    stop: int
    children: List[SyntaxNode] = field(default_factory=list)


@dataclass
class SyntaxTree:
    """A parsed compilation unit: projected nodes plus the full token stream."""

    root: SourceFileNode
    tokens: TokenStream
    source_name: Optional[str] = None


def children_of(node: SyntaxNode) -> Sequence[SyntaxNode]:
    return getattr(node, "children", ())


__all__ = [
    "ImportNode",
    "MethodNode",
    "PackageNode",
    "ParameterNode",
    "ReceiverNode",
    "SignatureNode",
    "SourceFileNode",
    "SyntaxNode",
    "SyntaxTree",
    "Token",
    "TokenStream",
    "children_of",
]
