"""Tests for the Go formatter adapters."""

from __future__ import annotations

import subprocess

import pytest

from gointerface.errors import FormatterUnavailableError, SynthesisFailedError
from gointerface.formatting import GofmtFormatter, SyntaxCheckFormatter, resolve_formatter


def test_gofmt_formatter_pipes_source_through_executable(monkeypatch) -> None:
    recorded: list[dict[str, object]] = []

    def fake_run(args, input, capture_output, text, check):  # type: ignore[no-untyped-def]
        recorded.append({"args": list(args), "input": input})

        class _Completed:
            returncode = 0
            stdout = "package shapes\n"
            stderr = ""

        return _Completed()

    monkeypatch.setattr("gointerface.formatting.subprocess.run", fake_run)

    result = GofmtFormatter(executable="/opt/go/bin/gofmt").format("package  shapes\n")

    assert result == "package shapes\n"
    assert recorded == [{"args": ["/opt/go/bin/gofmt"], "input": "package  shapes\n"}]


def test_gofmt_formatter_reports_rejection(monkeypatch) -> None:
    def fake_run(args, input, capture_output, text, check):  # type: ignore[no-untyped-def]
        return subprocess.CompletedProcess(args, 2, stdout="", stderr="<standard input>:3:1: expected '}'")

    monkeypatch.setattr("gointerface.formatting.subprocess.run", fake_run)

    with pytest.raises(SynthesisFailedError) as excinfo:
        GofmtFormatter().format("package shapes\ntype I interface {\n")
    assert "expected '}'" in str(excinfo.value)
    assert excinfo.value.raw_text == "package shapes\ntype I interface {\n"


def test_gofmt_formatter_missing_executable(monkeypatch) -> None:
    def fake_run(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("gofmt")

    monkeypatch.setattr("gointerface.formatting.subprocess.run", fake_run)

    with pytest.raises(FormatterUnavailableError):
        GofmtFormatter().format("package shapes\n")


def test_syntax_check_formatter_tidies_interfaces() -> None:
    raw = (
        "// Code generated from gointerface\n"
        "package shapes\n"
        "import (\n"
        ' "fmt"\n'
        'm "math"\n'
        ")\n"
        "type ICircle interface {\n"
        "\n"
        "\n"
        "// Area doc.\n"
        "Area () float64\n"
        "\n"
        "\n"
        "Perimeter () float64\n"
        "}\n"
        "\n"
    )
    expected = (
        "// Code generated from gointerface\n"
        "package shapes\n"
        "import (\n"
        '\t"fmt"\n'
        '\tm "math"\n'
        ")\n"
        "type ICircle interface {\n"
        "\t// Area doc.\n"
        "\tArea () float64\n"
        "\n"
        "\tPerimeter () float64\n"
        "}\n"
    )
    assert SyntaxCheckFormatter().format(raw) == expected


def test_syntax_check_formatter_leaves_block_comments_alone() -> None:
    raw = "package p\ntype I interface {\n\n/*\n\nBlock.\n\n*/\nRun ()\n}\n"
    expected = "package p\ntype I interface {\n\t/*\n\nBlock.\n\n*/\n\tRun ()\n}\n"
    assert SyntaxCheckFormatter().format(raw) == expected


def test_syntax_check_formatter_rejects_invalid_go() -> None:
    raw = "package p\ntype I interface {\nArea (\n}\n"
    with pytest.raises(SynthesisFailedError) as excinfo:
        SyntaxCheckFormatter().format(raw)
    assert excinfo.value.raw_text == raw


def test_resolve_formatter_auto_prefers_gofmt(monkeypatch) -> None:
    monkeypatch.setattr("gointerface.formatting.shutil.which", lambda name: "/usr/local/go/bin/gofmt")
    formatter = resolve_formatter("auto")
    assert isinstance(formatter, GofmtFormatter)
    assert formatter.executable == "/usr/local/go/bin/gofmt"


def test_resolve_formatter_auto_falls_back_to_syntax_check(monkeypatch) -> None:
    monkeypatch.setattr("gointerface.formatting.shutil.which", lambda name: None)
    assert isinstance(resolve_formatter(None), SyntaxCheckFormatter)


def test_resolve_formatter_rejects_unknown_name() -> None:
    assert isinstance(resolve_formatter("check"), SyntaxCheckFormatter)
    assert isinstance(resolve_formatter("gofmt"), GofmtFormatter)
    with pytest.raises(ValueError):
        resolve_formatter("prettier")
