"""Tests for Rich Console factory and theme."""

from io import StringIO

from interop.output.console import (
    INTEROP_THEME,
    create_console,
    get_output,
    style_for_kind,
)


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[interop.error]boom[/interop.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestTheme:
    def test_kind_styles_are_themed(self) -> None:
        for kind in ("global", "project", "alias"):
            assert style_for_kind(kind) in INTEROP_THEME.styles

    def test_unknown_kind(self) -> None:
        assert style_for_kind("other") == ""
