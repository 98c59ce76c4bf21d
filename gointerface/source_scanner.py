"""Input resolution: stdin, a single Go file, or a package directory."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from .logging import get_logger

STDIN_LABEL = "<stdin>"

Source = Tuple[str, str]


class SourceScanner:
    """Collects `(label, text)` pairs for every compilation unit to analyze."""

    def __init__(self, *, include_tests: bool = False, stdin: Optional[TextIO] = None) -> None:
        self.include_tests = include_tests
        self._stdin = stdin
        self.logger = get_logger("source_scanner")

    def collect(self, path: Optional[str]) -> List[Source]:
        if path is None or path == "-":
            stream = self._stdin or sys.stdin
            return [(STDIN_LABEL, stream.read())]

        target = Path(path).expanduser()
        if not target.exists():
            raise FileNotFoundError(f"Input not found: {target}")

        if target.is_dir():
            sources = [(str(file), _read_text(file)) for file in self._package_files(target)]
            if not sources:
                raise FileNotFoundError(f"Go file not found in {target}")
            self.logger.debug("Collected %d Go files from %s", len(sources), target)
            return sources

        return [(str(target), _read_text(target))]

    def _package_files(self, directory: Path) -> List[Path]:
        files: List[Path] = []
        for entry in sorted(directory.iterdir(), key=lambda item: item.name):
            if not entry.is_file() or entry.suffix != ".go":
                continue
            if entry.name.endswith("_test.go") and not self.include_tests:
                self.logger.debug("Skipping test file %s", entry.name)
                continue
            files.append(entry)
        return files


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


__all__ = ["STDIN_LABEL", "Source", "SourceScanner"]
