"""gointerface: generate Go interface declarations from concrete method sets."""

from __future__ import annotations

from . import errors
from .aggregate import aggregate
from .extract import extract
from .generator import InterfaceGenerator
from .synthesize import synthesize

__all__ = [
    "InterfaceGenerator",
    "aggregate",
    "errors",
    "extract",
    "synthesize",
]
