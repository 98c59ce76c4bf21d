"""Domain-specific errors for gointerface."""

from __future__ import annotations

from typing import Sequence


class GoInterfaceError(Exception):
    """Base error for gointerface."""


class ConfigError(GoInterfaceError):
    """Raised when the configuration file cannot be parsed."""


class MalformedUnitError(GoInterfaceError):
    """Raised when a compilation unit lacks a node the extractor needs."""

    def __init__(self, source: str | None, reason: str) -> None:
        self.source = source
        self.reason = reason
        label = source or "<unknown>"
        super().__init__(f"{label}: {reason}")


class PackageMismatchError(GoInterfaceError):
    """Raised when units merged into one output declare different packages."""

    def __init__(self, expected: str, found: str, source: str | None = None) -> None:
        self.expected = expected
        self.found = found
        self.source = source
        message = f"package name not same, {found} != {expected}"
        if source:
            message += f" (in {source})"
        super().__init__(message)


class SynthesisFailedError(GoInterfaceError):
    """Raised when the generated text is not valid Go."""

    def __init__(self, reason: str, raw_text: str = "") -> None:
        self.reason = reason
        self.raw_text = raw_text
        super().__init__(reason)


class DuplicateMethodSignatureError(SynthesisFailedError):
    """Raised when one interface would declare a method twice with different signatures."""

    def __init__(
        self,
        interface_name: str,
        identifier: str,
        signatures: Sequence[str],
        raw_text: str = "",
    ) -> None:
        self.interface_name = interface_name
        self.identifier = identifier
        self.signatures = tuple(signatures)
        listed = "; ".join(self.signatures)
        super().__init__(
            f"interface {interface_name} declares {identifier} with conflicting signatures: {listed}",
            raw_text,
        )


class GenericReceiverError(SynthesisFailedError):
    """Raised when a receiver type carries type parameters an interface cannot name."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            f"receiver type {type_name} is generic; exclude it with --types or declare its interface by hand"
        )


class FormatterUnavailableError(GoInterfaceError):
    """Raised when the configured Go formatter cannot be executed."""


__all__ = [
    "ConfigError",
    "DuplicateMethodSignatureError",
    "FormatterUnavailableError",
    "GenericReceiverError",
    "GoInterfaceError",
    "MalformedUnitError",
    "PackageMismatchError",
    "SynthesisFailedError",
]
