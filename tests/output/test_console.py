"""Tests for the Rich console factory."""

import sys

import pytest
from rich.console import Console
from rich.text import Text

from t2tctl.output.console import DEFAULT_WIDTH, T2T_THEME, create_console, get_output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print(Text("OK", style="t2t.ok"))
        assert get_output(console) == "OK\n"

    def test_no_ansi_outside_terminal(self) -> None:
        console = create_console()
        console.print("[t2t.error]ERROR[/t2t.error]")
        assert "\x1b[" not in get_output(console)

    def test_width_override(self) -> None:
        assert create_console(width=40).width == 40

    def test_theme_styles(self) -> None:
        for name in ("t2t.ok", "t2t.error", "t2t.op", "t2t.date", "t2t.modifier"):
            assert name in T2T_THEME.styles

    def test_default_width(self) -> None:
        assert create_console().width == DEFAULT_WIDTH

    def test_numbers_not_highlighted(self) -> None:
        console = create_console()
        console.print("Pay 300 invoices")
        assert get_output(console) == "Pay 300 invoices\n"

    def test_get_output_requires_buffer(self) -> None:
        with pytest.raises(TypeError):
            get_output(Console(file=sys.stderr))
