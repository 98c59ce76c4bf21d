"""Syntax model adapters feeding the extraction visitor."""

from .go import GoSyntaxAdapter, parse_go
from .nodes import SyntaxTree, Token, TokenStream

__all__ = ["GoSyntaxAdapter", "SyntaxTree", "Token", "TokenStream", "parse_go"]
