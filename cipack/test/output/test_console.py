"""Tests for cipack.output.console module."""

from __future__ import annotations

import pytest

from cipack.output.console import MockConsole, RichConsole, Style, format_command


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.HEADER) == "header"


class TestFormatCommand:
    def test_plain(self) -> None:
        assert format_command(["cargo", "build", "--release"]) == "+ cargo build --release"

    def test_quotes_like_a_shell(self) -> None:
        assert format_command(["cargo", "build", "--features", "a b"]) == (
            "+ cargo build --features 'a b'"
        )


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_records_styles(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")

        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_success()

    def test_command_echo(self) -> None:
        console = MockConsole()
        console.command(["cargo", "test"])

        assert console.commands == [["cargo", "test"]]
        assert console.outputs[0].message == "+ cargo test"
        assert console.outputs[0].style == Style.DIM

    def test_headers(self) -> None:
        console = MockConsole()
        console.header("Build")
        console.print("noise")
        console.header("Test")

        assert console.headers == ["Build", "Test"]

    def test_find_and_text(self) -> None:
        console = MockConsole()
        console.print("alpha")
        console.newline()
        console.print("beta", Style.BOLD)

        assert console.text == "alpha\n\nbeta"
        assert len(console.find("bet")) == 1


class TestRichConsole:
    def test_writes_without_interpreting_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("[bold]not markup[/bold]")
        console.command(["echo", "[x]"])

        out = capsys.readouterr().out
        assert "[bold]not markup[/bold]" in out
        assert "+ echo '[x]'" in out

    def test_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).info("to stderr")

        captured = capsys.readouterr()
        assert "to stderr" in captured.err
        assert captured.out == ""
