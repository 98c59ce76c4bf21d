"""Core data models shared across gointerface components."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ImportRecord:
    """A single import spec; an empty alias means no explicit alias."""

    alias: str
    path: str


@dataclass(frozen=True)
class ReceiverDescriptor:
    """Receiver type of a method with any pointer marker already stripped."""

    type_name: str
    is_reference_receiver: bool = False


@dataclass
class MethodRecord:
    """A method declaration captured from one compilation unit."""

    receiver: ReceiverDescriptor
    identifier: str
    signature_text: str
    leading_comment_text: str = ""


@dataclass
class CompilationUnitModel:
    """Structured view of one analyzed source file."""

    package_name: str
    imports: Tuple[ImportRecord, ...] = ()
    methods: Tuple[MethodRecord, ...] = ()
    source: Optional[str] = None


@dataclass
class InterfaceGroup:
    """Methods attached to one receiver type, split by receiver kind."""

    type_name: str
    value_receiver_methods: List[MethodRecord] = field(default_factory=list)
    reference_receiver_methods: List[MethodRecord] = field(default_factory=list)

    def add(self, method: MethodRecord) -> None:
        if method.receiver.is_reference_receiver:
            self.reference_receiver_methods.append(method)
        else:
            self.value_receiver_methods.append(method)

    def is_empty(self) -> bool:
        return not self.value_receiver_methods and not self.reference_receiver_methods


def is_exported(identifier: str) -> bool:
    """Return True when the identifier is visible outside its package."""
    return bool(identifier) and identifier[0].isupper()


__all__ = [
    "CompilationUnitModel",
    "ImportRecord",
    "InterfaceGroup",
    "MethodRecord",
    "ReceiverDescriptor",
    "is_exported",
]
