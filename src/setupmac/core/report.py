"""Human-facing progress output.

Every line starts with a fixed marker glyph followed by a severity tag, and
each step is announced by a banner carrying its start time.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum

from rich.console import Console

MARKER = "🍎"
PROGRAM = "setup-mac"


class Severity(str, Enum):
    """Severity of a progress line."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def tag(self) -> str:
        return _TAGS[self]


_TAGS = {
    Severity.INFO: "ℹ️ ",
    Severity.SUCCESS: "✅",
    Severity.WARNING: "⚠️ ",
    Severity.ERROR: "❌",
}


class Reporter:
    """Writes progress lines and section banners to the terminal."""

    def __init__(
        self,
        console: Console | None = None,
        marker: str = MARKER,
        program: str = PROGRAM,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the Reporter.

        Args:
            console: Console to print to (stdout by default)
            marker: Glyph prefixed to every line
            program: Program name shown in banners
            clock: Source of banner timestamps
        """
        self.console = console or Console()
        self.marker = marker
        self.program = program
        self._clock = clock

    def section(self, title: str) -> None:
        """Announce the start of a section."""
        started = self._clock().strftime("%Y-%m-%d %H:%M:%S")
        self._print("")
        self._print("==========================================")
        self._print("")
        self._print(f"{self.marker} {self.program}")
        self._print(f"{self.marker} {title}")
        self._print(f"{self.marker} Started: {started}")

    def info(self, message: str) -> None:
        self.emit(Severity.INFO, message)

    def success(self, message: str) -> None:
        self.emit(Severity.SUCCESS, message)

    def warning(self, message: str) -> None:
        self.emit(Severity.WARNING, message)

    def error(self, message: str) -> None:
        self.emit(Severity.ERROR, message)

    def emit(self, severity: Severity, message: str) -> None:
        """Print one tagged progress line."""
        self._print(f"{self.marker} {severity.tag} {message}")

    def finale(self, message: str) -> None:
        """Print the closing banner."""
        self._print("")
        self._print("")
        triple = self.marker * 3
        self._print(triple)
        self._print(f"{triple} {message}")
        self._print(triple)

    def _print(self, text: str) -> None:
        # Messages carry shell snippets, so rich markup must stay off
        self.console.print(text, markup=False, highlight=False, emoji=False)
