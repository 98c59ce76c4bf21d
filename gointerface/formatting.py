"""Formatter adapters that canonicalise generated Go source."""

from __future__ import annotations

import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Set

from tree_sitter import Parser

from .errors import FormatterUnavailableError, SynthesisFailedError
from .logging import get_logger
from .syntax.go import first_syntax_error, go_language

FORMATTER_CHOICES = ("auto", "gofmt", "check")

_MULTILINE_TOKENS = {"comment", "raw_string_literal"}
_INDENTED_BLOCKS = {"interface_type", "import_spec_list"}


class Formatter(ABC):
    """Contract for adapters that reformat generated Go source."""

    name = "formatter"

    @abstractmethod
    def format(self, source: str) -> str:
        """Return canonical text or raise `SynthesisFailedError`."""


class GofmtFormatter(Formatter):
    """Pipes generated source through the `gofmt` executable."""

    name = "gofmt"

    def __init__(self, executable: str | None = None) -> None:
        self.executable = executable or "gofmt"
        self.logger = get_logger("formatting.gofmt")

    def format(self, source: str) -> str:
        try:
            completed = subprocess.run(
                [self.executable],
                input=source,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise FormatterUnavailableError(
                f"Unable to locate gofmt executable '{self.executable}'."
            ) from exc

        if completed.returncode != 0:
            message = completed.stderr.strip() or completed.stdout.strip() or str(completed.returncode)
            raise SynthesisFailedError(f"gofmt rejected generated code: {message}", source)

        self.logger.debug("gofmt produced %d bytes", len(completed.stdout))
        return completed.stdout


class SyntaxCheckFormatter(Formatter):
    """Validates generated source with tree-sitter and tidies whitespace.

    Used when no Go toolchain is installed. Lines inside interface bodies and
    import blocks are re-indented with a tab, blank-line runs collapse to
    one, and text inside multi-line comments is left untouched.
    """

    name = "check"

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def format(self, source: str) -> str:
        text = source.replace("\r\n", "\n").replace("\r", "\n")
        tree = self._get_parser().parse(text.encode("utf-8"))
        error = first_syntax_error(tree.root_node)
        if error is not None:
            line, column = error.start_point
            raise SynthesisFailedError(
                f"generated code is not valid Go (line {line + 1}, column {column + 1})",
                source,
            )

        protected: Set[int] = set()
        indented: Set[int] = set()
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            start_row = node.start_point[0]
            end_row = node.end_point[0]
            if node.type in _MULTILINE_TOKENS and end_row > start_row:
                protected.update(range(start_row + 1, end_row + 1))
            elif node.type in _INDENTED_BLOCKS:
                indented.update(range(start_row + 1, end_row))
            stack.extend(node.children)

        cleaned: List[str] = []
        previous_blank = False
        for row, line in enumerate(text.split("\n")):
            if row in protected:
                cleaned.append(line.rstrip())
                previous_blank = False
                continue

            stripped = line.strip() if row in indented else line.rstrip()
            if not stripped:
                if previous_blank or (cleaned and cleaned[-1].endswith(("{", "("))):
                    continue
                previous_blank = True
                cleaned.append("")
                continue

            if stripped in {"}", ")"} and cleaned and cleaned[-1] == "":
                cleaned.pop()
            cleaned.append(f"\t{stripped}" if row in indented else stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(go_language())
        return self._parser


def resolve_formatter(name: str | None = None) -> Formatter:
    """Return the formatter registered under `name` (`auto` when omitted)."""
    key = (name or "auto").lower()
    if key == "gofmt":
        return GofmtFormatter()
    if key == "check":
        return SyntaxCheckFormatter()
    if key == "auto":
        executable = shutil.which("gofmt")
        if executable:
            return GofmtFormatter(executable)
        get_logger("formatting").info("gofmt not found on PATH; using syntax check formatter")
        return SyntaxCheckFormatter()
    raise ValueError(f"Unknown formatter requested: {name}")


__all__ = [
    "FORMATTER_CHOICES",
    "Formatter",
    "GofmtFormatter",
    "SyntaxCheckFormatter",
    "resolve_formatter",
]
