"""Tests for kb.output.console."""

from __future__ import annotations

import pytest

from kb.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()
        console.print("plain")
        console.success("done")
        console.warning("careful")
        console.error("broken")

        assert [o.style for o in console.outputs] == [
            Style.DEFAULT,
            Style.SUCCESS,
            Style.WARNING,
            Style.ERROR,
        ]
        assert console.messages[1:] == ["OK done", "warning: careful", "error: broken"]
        assert console.has_error()
        assert console.has_warning()

    def test_find(self) -> None:
        console = MockConsole()
        console.info("Pushing repo/svc:1.0.0-1.0.0...")
        console.header("Release 1.0.0-1.0.0")

        assert len(console.find("repo/svc")) == 1
        assert console.find("missing") == []
        assert console.text == "Pushing repo/svc:1.0.0-1.0.0...\nRelease 1.0.0-1.0.0"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.header("x")


class TestRichConsole:
    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("push failed")
        console.info("building")

        captured = capsys.readouterr()
        assert "push failed" in captured.err
        assert "building" in captured.out
        assert "push failed" not in captured.out

    def test_markup_in_messages_is_not_interpreted(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        console = RichConsole()
        console.success("tag [bold]x[/bold]")
        console.print("[dim]raw[/dim]", Style.DIM)

        out = capsys.readouterr().out
        assert "[bold]x[/bold]" in out
        assert "[dim]raw[/dim]" in out
