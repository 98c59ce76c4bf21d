"""Pipeline orchestration: sources to formatted interface declarations."""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Optional

from .aggregate import aggregate, pool_imports, shared_package_name
from .extract import extract
from .formatting import Formatter, resolve_formatter
from .logging import get_logger
from .models import CompilationUnitModel
from .source_scanner import Source
from .synthesize import synthesize
from .syntax.go import GoSyntaxAdapter


class InterfaceGenerator:
    """Coordinates extraction, aggregation and synthesis for one run."""

    def __init__(
        self,
        *,
        include_unexported: bool = False,
        allow_list: Optional[AbstractSet[str]] = None,
        package_name: Optional[str] = None,
        formatter: Formatter | None = None,
        adapter: GoSyntaxAdapter | None = None,
    ) -> None:
        self.include_unexported = include_unexported
        self.allow_list = frozenset(allow_list) if allow_list is not None else None
        self.package_name = package_name
        self.adapter = adapter or GoSyntaxAdapter()
        self._formatter = formatter
        self.logger = get_logger("generator")

    @property
    def formatter(self) -> Formatter:
        if self._formatter is None:
            self._formatter = resolve_formatter("auto")
        return self._formatter

    def extract_units(self, sources: Iterable[Source]) -> List[CompilationUnitModel]:
        """Parse and extract every source; the first malformed unit aborts the run."""
        units: List[CompilationUnitModel] = []
        for label, text in sources:
            tree = self.adapter.parse(text, label)
            units.append(extract(tree, include_unexported=self.include_unexported))
        self.logger.debug("Extracted %d compilation units", len(units))
        return units

    def generate(self, units: List[CompilationUnitModel]) -> str:
        """Aggregate extracted units and emit formatted interface source."""
        if not units:
            self.logger.info("No compilation units to process")
            return ""

        package_name = shared_package_name(units)
        groups = aggregate(units, self.allow_list)
        if self.allow_list is not None:
            missing = sorted(self.allow_list - set(groups))
            if missing:
                self.logger.warning("No methods found for requested types: %s", ", ".join(missing))

        output_package = self.package_name or package_name or ""
        self.logger.info(
            "Generating interfaces for %d types in package %s", len(groups), output_package
        )
        return synthesize(output_package, pool_imports(units), groups, self.formatter)

    def generate_from_sources(self, sources: Iterable[Source]) -> str:
        return self.generate(self.extract_units(sources))


__all__ = ["InterfaceGenerator"]
