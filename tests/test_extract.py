"""Tests for the extraction visitor."""

from __future__ import annotations

import pytest

from gointerface.errors import MalformedUnitError
from gointerface.extract import extract
from gointerface.models import ImportRecord, ReceiverDescriptor
from gointerface.syntax.nodes import (
    ImportNode,
    MethodNode,
    PackageNode,
    ParameterNode,
    ReceiverNode,
    SignatureNode,
    SourceFileNode,
    SyntaxTree,
    TokenStream,
)

from tests._fixtures.go_sources import EXAMPLE, SHAPES_CIRCLE, parse_unit

# package demo\n\n// Run starts T.\nfunc (t *T) Run(o *Other) error {}
_PARTS = [
    "package", " ", "demo", "\n\n", "// Run starts T.", "\n",
    "func", " ", "(", "t", " ", "*", "T", ")", " ", "Run",
    "(", "o", " ", "*", "Other", ")", " ", "error", " ", "{", "}",
]


def _tokens() -> TokenStream:
    return TokenStream.from_texts(
        [(part, not part.strip() or part.startswith("//")) for part in _PARTS]
    )


def _method(identifier: str = "Run", *, with_signature: bool = True) -> MethodNode:
    method = MethodNode(start=6, stop=26, identifier=identifier)
    method.children.append(
        ReceiverNode(start=8, stop=13, children=[ParameterNode(start=9, stop=12, type_start=11, type_stop=12)])
    )
    if with_signature:
        method.children.append(
            SignatureNode(
                start=16,
                stop=23,
                children=[ParameterNode(start=17, stop=20, type_start=19, type_stop=20)],
            )
        )
    return method


def _tree(*children, source_name: str = "demo.go") -> SyntaxTree:  # type: ignore[no-untyped-def]
    root = SourceFileNode(start=0, stop=len(_PARTS) - 1, children=list(children))
    return SyntaxTree(root=root, tokens=_tokens(), source_name=source_name)


def test_extract_builds_method_record_from_tree() -> None:
    unit = extract(_tree(PackageNode(start=0, stop=2, name="demo"), _method()))

    assert unit.package_name == "demo"
    assert unit.source == "demo.go"
    (method,) = unit.methods
    assert method.identifier == "Run"
    assert method.receiver == ReceiverDescriptor(type_name="T", is_reference_receiver=True)
    assert method.signature_text == "(o *Other) error"
    assert method.leading_comment_text == "\n\n// Run starts T.\n"


def test_signature_parameters_do_not_overwrite_receiver() -> None:
    unit = extract(_tree(PackageNode(start=0, stop=2, name="demo"), _method()))
    assert unit.methods[0].receiver.type_name == "T"


def test_unexported_method_is_skipped_without_state_leak() -> None:
    tree = _tree(
        PackageNode(start=0, stop=2, name="demo"),
        _method("run"),
        _method("Run"),
    )
    unit = extract(tree, include_unexported=False)
    assert [method.identifier for method in unit.methods] == ["Run"]


def test_unexported_method_included_on_request() -> None:
    unit = extract(_tree(PackageNode(start=0, stop=2, name="demo"), _method("run")), include_unexported=True)
    assert [method.identifier for method in unit.methods] == ["run"]


def test_blank_imports_are_dropped() -> None:
    tree = _tree(
        PackageNode(start=0, stop=2, name="demo"),
        ImportNode(start=0, stop=0, path='"embed"', alias="_"),
        ImportNode(start=0, stop=0, path='"fmt"'),
        ImportNode(start=0, stop=0, path='"strings"', alias="."),
    )
    unit = extract(tree)
    assert unit.imports == (ImportRecord("", '"fmt"'), ImportRecord(".", '"strings"'))


def test_missing_package_clause_is_malformed() -> None:
    with pytest.raises(MalformedUnitError) as excinfo:
        extract(_tree(_method()))
    assert excinfo.value.source == "demo.go"


def test_missing_signature_is_malformed() -> None:
    with pytest.raises(MalformedUnitError):
        extract(_tree(PackageNode(start=0, stop=2, name="demo"), _method(with_signature=False)))


def test_extract_real_unit_filters_private_methods() -> None:
    unit = parse_unit(SHAPES_CIRCLE, "circle.go")

    assert unit.package_name == "shapes"
    assert unit.imports == (ImportRecord("", '"fmt"'), ImportRecord("m", '"math"'))
    assert [method.identifier for method in unit.methods] == ["Area", "Perimeter"]
    assert all(method.receiver.is_reference_receiver for method in unit.methods)
    assert unit.methods[0].leading_comment_text == "\n\n// Area returns the area.\n"
    assert unit.methods[1].leading_comment_text == "\n\n"


def test_extract_real_unit_with_private_methods() -> None:
    unit = parse_unit(SHAPES_CIRCLE, include_unexported=True)
    assert [method.identifier for method in unit.methods] == ["Area", "Perimeter", "area"]


def test_extract_keeps_comments_and_multiline_signatures_verbatim() -> None:
    unit = parse_unit(EXAMPLE, "example.go")
    by_name = {method.identifier: method for method in unit.methods}

    assert list(by_name) == ["ToJson", "ComplexMethod", "Desc"]
    assert by_name["ToJson"].leading_comment_text == (
        "\n\n/*\n\nSome block comments.\n\n*/\n\n"
        "// ToJson converts the object to a json bytes.\n"
        "// some other comments\n"
    )
    assert by_name["ToJson"].signature_text == "(sb strings.Builder) ([]byte, error)"
    assert by_name["ComplexMethod"].signature_text == (
        "(c, d *map[string]int) (f1, f2 func(\n"
        "\t*map[string]int, *map[string]int), x *map[string]int, y *map[string]int)"
    )
    assert by_name["Desc"].receiver == ReceiverDescriptor("IntArray", True)
    assert by_name["Desc"].signature_text == "()"
    assert unit.imports == (
        ImportRecord("", '"fmt"'),
        ImportRecord("", '"strings"'),
        ImportRecord("j", '"encoding/json"'),
    )
