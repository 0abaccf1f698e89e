"""Command models for system execution."""

import shlex
from dataclasses import dataclass, field


@dataclass
class Command:
    """Represents a command to be executed during provisioning.

    Attributes:
        executable: The command to execute
        args: Arguments to pass to the executable
        env: Extra environment variables for this command only
        interactive: Attach the command to the terminal instead of capturing it
    """

    executable: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    interactive: bool = False

    @property
    def full_command(self) -> list[str]:
        """Build the full command.

        Returns:
            List of command components
        """
        return [self.executable, *self.args]

    @property
    def command_string(self) -> str:
        """Build the command as a properly escaped shell string.

        Returns:
            Shell-escaped command string
        """
        return shlex.join(self.full_command)


def shell(script: str) -> Command:
    """Build a command that runs a script through bash.

    Used where the action needs shell features such as sourcing a
    function-based tool (nvm) before calling it.
    """
    return Command(executable="/bin/bash", args=["-c", script])


class CommandError(Exception):
    """Raised when a command execution fails.

    Attributes:
        command: The command that failed
        returncode: Exit code from the command
        output: Combined stdout/stderr output
    """

    def __init__(self, command: str, returncode: int, output: str) -> None:
        """Initialize CommandError.

        Args:
            command: The command that failed
            returncode: Exit code from the command
            output: Combined stdout/stderr output
        """
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(f"Command failed with exit code {returncode}: {command}")
