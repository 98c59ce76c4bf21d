"""Interface synthesizer: emit Go interface declarations for grouped methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Sequence

from .errors import DuplicateMethodSignatureError, GenericReceiverError
from .logging import get_logger
from .models import ImportRecord, InterfaceGroup, MethodRecord

if TYPE_CHECKING:
    from .formatting import Formatter

GENERATED_MARKER = "// Code generated from gointerface\n"
VALUE_SUFFIX = "Value"
TYPE_PARAMETER_OPEN = "["
INTERFACE_PREFIX = "I"

_logger = get_logger("synthesize")


def interface_name(type_name: str, *, value_variant: bool = False) -> str:
    suffix = VALUE_SUFFIX if value_variant else ""
    return f"{INTERFACE_PREFIX}{type_name}{suffix}"


def unique_imports(imports: Iterable[ImportRecord]) -> List[ImportRecord]:
    """Collapse duplicate `(alias, path)` pairs and order by path, then alias."""
    return sorted(set(imports), key=lambda record: (record.path, record.alias))


def plan_interfaces(group: InterfaceGroup) -> List[tuple[str, List[MethodRecord]]]:
    """Return `(interface name, methods)` pairs to emit for one receiver type.

    Empty groups yield nothing. Generic receivers such as `Stack[T]` raise
    `GenericReceiverError`, since `IStack[T]` would read as an array type.
    """
    if group.is_empty():
        return []
    if TYPE_PARAMETER_OPEN in group.type_name:
        raise GenericReceiverError(group.type_name)
    pointer = group.reference_receiver_methods
    value = group.value_receiver_methods
    if pointer and value:
        return [
            (interface_name(group.type_name), list(pointer)),
            (interface_name(group.type_name, value_variant=True), list(value)),
        ]
    if pointer:
        return [(interface_name(group.type_name), list(pointer))]
    return [(interface_name(group.type_name), list(value))]


def render(
    package_name: str,
    imports: Sequence[ImportRecord],
    groups: Mapping[str, InterfaceGroup],
) -> str:
    """Assemble the unformatted Go source for every interface group."""
    parts: List[str] = [GENERATED_MARKER, f"package {package_name}\n"]
    parts.append(_render_imports(unique_imports(imports)))

    emitted = 0
    for type_name in sorted(groups):
        for name, methods in plan_interfaces(groups[type_name]):
            parts.append(_render_interface(name, methods))
            emitted += 1

    _logger.debug("Rendered %d interfaces for %d receiver types", emitted, len(groups))
    return "".join(parts)


def synthesize(
    package_name: str,
    imports: Sequence[ImportRecord],
    groups: Mapping[str, InterfaceGroup],
    formatter: Optional["Formatter"] = None,
) -> str:
    """Render the interfaces and pass the result through a Go formatter.

    Raises `SynthesisFailedError` when the formatter rejects the text, and its
    subclass `DuplicateMethodSignatureError` when one interface would declare
    the same method name with two different signatures.
    """
    raw = render(package_name, imports, groups)
    if formatter is None:
        from .formatting import resolve_formatter

        formatter = resolve_formatter("auto")
    return formatter.format(raw)


def _render_imports(imports: Sequence[ImportRecord]) -> str:
    if not imports:
        return ""
    lines = ["import (\n"]
    for record in imports:
        lines.append(f"{record.alias} {record.path}\n")
    lines.append(")\n")
    return "".join(lines)


def _render_interface(name: str, methods: Sequence[MethodRecord]) -> str:
    ordered = sorted(methods, key=lambda method: method.identifier)
    _check_conflicts(name, ordered)

    lines = [f"type {name} interface {{\n\n"]
    for method in ordered:
        lines.append("\n")
        lines.append(method.leading_comment_text)
        lines.append(f"{method.identifier} {method.signature_text}\n")
    lines.append("}\n\n")
    return "".join(lines)


def _check_conflicts(name: str, methods: Sequence[MethodRecord]) -> None:
    signatures: Dict[str, List[str]] = {}
    for method in methods:
        seen = signatures.setdefault(method.identifier, [])
        normalized = " ".join(method.signature_text.split())
        if normalized not in seen:
            seen.append(normalized)
    for identifier, seen in signatures.items():
        if len(seen) > 1:
            raise DuplicateMethodSignatureError(name, identifier, seen)


__all__ = [
    "GENERATED_MARKER",
    "interface_name",
    "plan_interfaces",
    "render",
    "synthesize",
    "unique_imports",
]
