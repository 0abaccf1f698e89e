"""Local execution of provisioning commands."""

import asyncio
import os
import shutil
from pathlib import Path

from rich.console import Console
from rich.text import Text

from setupmac.core.logging import get_logger
from setupmac.system.command import Command, CommandError
from setupmac.system.download import download_file

logger = get_logger(__name__)

# Commands are built for a POSIX shell, so the user's login shell is not used
SHELL_CANDIDATES = ("/bin/bash", "/bin/zsh", "/bin/sh")


def _find_shell() -> str:
    """Pick the shell that runs command strings.

    Raises:
        RuntimeError: If no POSIX shell is available
    """
    for candidate in SHELL_CANDIDATES:
        if Path(candidate).exists():
            return candidate

    for name in ("bash", "zsh", "sh"):
        found = shutil.which(name)
        if found:
            return found

    raise RuntimeError("No POSIX shell found to run commands")


class System:
    """Worker that runs commands on this Mac as the current user.

    The System owns the environment handed to child processes. Steps that
    install a tool put its directory on that PATH with ``add_to_path`` so
    that later steps find it without re-reading the shell profile.
    """

    def __init__(self, trace: bool = False) -> None:
        """Initialize the System.

        Args:
            trace: Print every command together with its output
        """
        self._trace = trace
        self._trace_console = Console(stderr=True, highlight=False)
        self._shell = _find_shell()
        self._env = dict(os.environ)
        self._user = os.getenv("USER", "")
        self._home = Path(os.getenv("HOME") or Path.home())

    def username(self) -> str:
        return self._user

    def home_dir(self) -> Path:
        return self._home

    @property
    def env(self) -> dict[str, str]:
        """Environment passed to child processes."""
        return self._env

    def which(self, executable: str) -> str | None:
        """Locate an executable on the worker's PATH.

        Args:
            executable: Name of the executable

        Returns:
            Full path or None if not found
        """
        return shutil.which(executable, path=self._env.get("PATH", ""))

    def add_to_path(self, directory: Path) -> None:
        """Prepend a directory to the PATH seen by later commands.

        Args:
            directory: Directory to prepend; ignored if already present
        """
        entry = str(directory)
        entries = [e for e in self._env.get("PATH", "").split(os.pathsep) if e]
        if entry in entries:
            return

        self._env["PATH"] = os.pathsep.join([entry, *entries])
        logger.debug("Added PATH entry", path=entry)

    async def run(self, cmd: Command) -> bytes:
        """Run a command through the shell and wait for it.

        Args:
            cmd: Command to run; its ``env`` is layered over the worker's

        Returns:
            Combined stdout/stderr output as bytes; empty for interactive
            commands, whose output goes straight to the terminal

        Raises:
            CommandError: If the command exits non-zero
        """
        command_string = cmd.command_string
        env = {**self._env, **cmd.env} if cmd.env else self._env

        if cmd.env:
            logger.debug("Starting command", command=command_string, env=" ".join(sorted(cmd.env)))
        else:
            logger.debug("Starting command", command=command_string)

        if cmd.interactive:
            # Inherits the terminal so that password prompts reach the user
            process = await asyncio.create_subprocess_shell(
                command_string, executable=self._shell, env=env
            )
        else:
            process = await asyncio.create_subprocess_shell(
                command_string,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                executable=self._shell,
                env=env,
            )
        output, _ = await process.communicate()
        output = output or b""

        if self._trace:
            self._show_trace(command_string, output)

        returncode = process.returncode
        if returncode:
            raise CommandError(command_string, returncode, output.decode("utf-8", errors="replace"))

        logger.debug("Finished command", command=command_string)
        return output

    async def succeeds(self, cmd: Command) -> bool:
        """Run a probe command and report whether it exited zero.

        Args:
            cmd: Command to run

        Returns:
            True if the command succeeded
        """
        try:
            await self.run(cmd)
        except CommandError as e:
            logger.debug("Probe failed", command=e.command, returncode=e.returncode)
            return False
        return True

    async def download(self, url: str, dest: Path) -> Path:
        return await download_file(url, dest)

    async def sleep(self, seconds: float) -> None:
        logger.debug("Waiting", seconds=seconds)
        await asyncio.sleep(seconds)

    def _home_path(self, relative: Path) -> Path:
        """Resolve a path inside the home directory.

        Raises:
            ValueError: If the path is absolute
        """
        if relative.is_absolute():
            raise ValueError(f"Expected a path relative to the home directory, got {relative}")
        return self._home / relative

    async def write_home_file(self, filepath: Path, contents: bytes) -> None:
        """Replace a file under the home directory, creating parents as needed.

        Args:
            filepath: Path relative to the home directory
            contents: New file contents

        Raises:
            ValueError: If filepath is absolute
            OSError: If the file cannot be written
        """
        target = self._home_path(filepath)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(contents)
        logger.debug("Wrote file", path=str(target))

    async def mk_home_subdir(self, subdirectory: Path) -> None:
        """Create a directory (and its parents) under the home directory.

        Raises:
            ValueError: If subdirectory is absolute
        """
        target = self._home_path(subdirectory)
        target.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory", path=str(target))

    async def remove_all_home(self, filepath: Path) -> None:
        """Delete a file or directory tree under the home directory, if present.

        Raises:
            ValueError: If filepath is absolute
        """
        target = self._home_path(filepath)
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()
        else:
            return
        logger.debug("Removed path", path=str(target))

    async def read_home_file(self, filepath: Path) -> bytes:
        """Read a file under the home directory.

        Raises:
            ValueError: If filepath is absolute
            FileNotFoundError: If the file does not exist
        """
        return self._home_path(filepath).read_bytes()

    def _show_trace(self, command: str, output: bytes) -> None:
        self._trace_console.print(Text.assemble(("$ ", "bold green"), (command, "bold")))
        text = output.decode("utf-8", errors="replace").rstrip()
        if text:
            self._trace_console.print(text, markup=False)
