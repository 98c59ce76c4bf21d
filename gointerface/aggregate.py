"""Merge per-file models into per-receiver-type interface groups."""

from __future__ import annotations

from typing import AbstractSet, Dict, List, Optional, Sequence

from .errors import PackageMismatchError
from .logging import get_logger
from .models import CompilationUnitModel, ImportRecord, InterfaceGroup

_logger = get_logger("aggregate")


def shared_package_name(units: Sequence[CompilationUnitModel]) -> Optional[str]:
    """Return the package every unit declares, or None for an empty input."""
    if not units:
        return None
    expected = units[0].package_name
    for unit in units[1:]:
        if unit.package_name != expected:
            raise PackageMismatchError(expected, unit.package_name, unit.source)
    return expected


def pool_imports(units: Sequence[CompilationUnitModel]) -> List[ImportRecord]:
    """Concatenate every unit's imports in input order, duplicates included."""
    pooled: List[ImportRecord] = []
    for unit in units:
        pooled.extend(unit.imports)
    return pooled


def aggregate(
    units: Sequence[CompilationUnitModel],
    allow_list: Optional[AbstractSet[str]] = None,
) -> Dict[str, InterfaceGroup]:
    """Group every method by receiver type and receiver kind.

    All units must share one package name. When `allow_list` is given, groups
    for other types are dropped.
    """
    if not units:
        return {}
    shared_package_name(units)

    groups: Dict[str, InterfaceGroup] = {}
    for unit in units:
        for method in unit.methods:
            type_name = method.receiver.type_name
            group = groups.get(type_name)
            if group is None:
                group = InterfaceGroup(type_name=type_name)
                groups[type_name] = group
            group.add(method)

    if allow_list is not None:
        dropped = [name for name in groups if name not in allow_list]
        for name in dropped:
            del groups[name]
        if dropped:
            _logger.debug("Dropped %d types not in allow-list: %s", len(dropped), ", ".join(sorted(dropped)))

    _logger.debug("Aggregated %d units into %d receiver types", len(units), len(groups))
    return groups


__all__ = ["aggregate", "pool_imports", "shared_package_name"]
