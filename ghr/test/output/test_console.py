"""Tests for ghr.output.console module."""

from __future__ import annotations

from ghr.output.console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.WARNING) == "warning"
        assert str(Style.DEFAULT) == "default"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("uploaded a.zip")
        console.warning("b.zip already exists, skipped")
        console.error("timed out")
        console.info("note")
        assert console.messages == [
            "OK uploaded a.zip",
            "warning: b.zip already exists, skipped",
            "error: timed out",
            "info: note",
        ]
        assert console.has_error()
        assert console.count(Style.WARNING) == 1

    def test_text_joins_lines(self) -> None:
        console = MockConsole()
        console.header("Uploading")
        console.print("a.zip", Style.DIM)
        assert console.text == "Uploading\na.zip"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("x")


class TestRichConsole:
    def test_prints_without_markup(self, capsys) -> None:
        console = RichConsole()
        console.print("v1 [draft]")
        console.success("a.zip")
        out = capsys.readouterr().out
        assert "v1 [draft]" in out
        assert "OK" in out
        assert "a.zip" in out
