"""Tests for Rich Console factory and theme."""

from io import StringIO

from taxctl.output.console import TAX_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[tax.error]hello[/tax.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80

    def test_default_width(self) -> None:
        assert create_console().width == 120


class TestTheme:
    def test_has_core_styles(self) -> None:
        for name in ("tax.ok", "tax.error", "tax.path", "tax.domain", "tax.crumb"):
            assert name in TAX_THEME.styles
