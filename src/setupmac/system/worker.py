"""Worker protocol for system operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from setupmac.system.command import Command


@runtime_checkable
class Worker(Protocol):
    """Protocol for a system that can execute commands and perform system operations.

    This protocol defines the interface that all system implementations must follow,
    allowing for both real system operations and fake implementations for testing.
    """

    async def run(self, cmd: Command) -> bytes:
        """Execute a command and return its output.

        Args:
            cmd: Command to execute

        Returns:
            Combined stdout/stderr output as bytes

        Raises:
            CommandError: If the command fails
        """
        ...

    async def succeeds(self, cmd: Command) -> bool:
        """Execute a command as a probe and report whether it exited zero.

        Args:
            cmd: Command to execute

        Returns:
            True if the command succeeded
        """
        ...

    def which(self, executable: str) -> str | None:
        """Locate an executable on the worker's PATH.

        Args:
            executable: Name of the executable

        Returns:
            Full path or None if not found
        """
        ...

    def add_to_path(self, directory: Path) -> None:
        """Prepend a directory to the PATH seen by later commands.

        Args:
            directory: Directory to prepend
        """
        ...

    async def download(self, url: str, dest: Path) -> Path:
        """Download a URL to a local file.

        Args:
            url: Source URL
            dest: Destination path

        Returns:
            The destination path

        Raises:
            DownloadError: If the download fails
        """
        ...

    async def sleep(self, seconds: float) -> None:
        """Block the run for a fixed delay.

        Args:
            seconds: Delay in seconds
        """
        ...

    async def write_home_file(self, filepath: Path, contents: bytes) -> None:
        """Write a file to the user's home directory.

        Args:
            filepath: Relative path within home directory
            contents: File contents to write

        Raises:
            OSError: If file cannot be written
        """
        ...

    async def mk_home_subdir(self, subdirectory: Path) -> None:
        """Create a directory in the user's home directory.

        Args:
            subdirectory: Relative path within home directory

        Raises:
            OSError: If directory cannot be created
        """
        ...

    async def remove_all_home(self, filepath: Path) -> None:
        """Recursively remove a file or directory from the user's home.

        Args:
            filepath: Relative path within home directory

        Raises:
            OSError: If removal fails
        """
        ...

    async def read_home_file(self, filepath: Path) -> bytes:
        """Read a file from the user's home directory.

        Args:
            filepath: Relative path within home directory

        Returns:
            File contents as bytes

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        ...

    def username(self) -> str:
        """Get the username.

        Returns:
            Username
        """
        ...

    def home_dir(self) -> Path:
        """Get the user's home directory.

        Returns:
            Path to home directory
        """
        ...
