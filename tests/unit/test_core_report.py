"""Unit tests for the progress reporter."""

from datetime import datetime

from rich.console import Console

from setupmac.core.report import MARKER, Reporter, Severity


def _reporter(console_output) -> Reporter:
    console = Console(file=console_output, force_terminal=False, width=200)
    return Reporter(console=console, clock=lambda: datetime(2024, 5, 1, 9, 30, 15))


class TestReporter:
    """Tests for Reporter."""

    def test_lines_carry_marker_and_tag(self, console_output) -> None:
        reporter = _reporter(console_output)

        reporter.info("Homebrew already installed")
        reporter.success("Go installed")
        reporter.warning("Ollama failed")
        reporter.error("Docker failed")

        lines = console_output.getvalue().splitlines()
        assert lines == [
            f"{MARKER} {Severity.INFO.tag} Homebrew already installed",
            f"{MARKER} {Severity.SUCCESS.tag} Go installed",
            f"{MARKER} {Severity.WARNING.tag} Ollama failed",
            f"{MARKER} {Severity.ERROR.tag} Docker failed",
        ]

    def test_every_severity_has_distinct_tag(self) -> None:
        tags = {severity.tag for severity in Severity}
        assert len(tags) == len(Severity)

    def test_section_banner(self, console_output) -> None:
        reporter = _reporter(console_output)

        reporter.section("Setting up Homebrew")

        output = console_output.getvalue()
        assert "=" * 42 in output
        assert f"{MARKER} setup-mac" in output
        assert f"{MARKER} Setting up Homebrew" in output
        assert f"{MARKER} Started: 2024-05-01 09:30:15" in output

    def test_markup_is_printed_literally(self, console_output) -> None:
        reporter = _reporter(console_output)

        reporter.info('eval "$(rbenv init - zsh)" [bold]x[/bold]')

        assert "[bold]x[/bold]" in console_output.getvalue()

    def test_finale(self, console_output) -> None:
        reporter = _reporter(console_output)

        reporter.finale("Setup Complete!")

        lines = console_output.getvalue().splitlines()
        assert lines[-3:] == [MARKER * 3, f"{MARKER * 3} Setup Complete!", MARKER * 3]
