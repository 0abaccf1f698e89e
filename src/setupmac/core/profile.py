"""Shell profile accumulated during a run."""

from pathlib import Path

from setupmac.core.logging import get_logger
from setupmac.system.worker import Worker

logger = get_logger(__name__)

DEFAULT_HEADER = [
    "# macOS Profile Configuration",
    "# This file is managed by setup-mac",
    "",
]


class ProfileBuilder:
    """Append-only builder for the user's shell profile.

    The builder starts from a fixed header on every run and is written out in
    one go by ``flush``, replacing whatever the file held before.
    """

    def __init__(self, path: Path, header: list[str] | None = None) -> None:
        """Initialize the ProfileBuilder.

        Args:
            path: Profile path relative to the home directory
            header: Lines written at the top of the file
        """
        if path.is_absolute():
            raise ValueError("Profile path must be relative to the home directory")

        self.path = path
        self.header = list(DEFAULT_HEADER if header is None else header)
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Lines appended so far, excluding the header."""
        return list(self._lines)

    def append(self, line: str) -> None:
        self._lines.append(line)

    def extend(self, lines: list[str]) -> None:
        for line in lines:
            self.append(line)

    def render(self) -> str:
        """Render the full file contents."""
        return "".join(f"{line}\n" for line in [*self.header, *self._lines])

    async def flush(self, system: Worker) -> None:
        """Write the profile to the user's home directory.

        Args:
            system: System worker

        Raises:
            OSError: If the file cannot be written
        """
        await system.write_home_file(self.path, self.render().encode("utf-8"))
        logger.debug("Profile written", path=str(self.path), lines=len(self._lines))
