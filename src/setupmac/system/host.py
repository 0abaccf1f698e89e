"""Host environment checks run before provisioning starts."""

import platform
import sys

MIN_PYTHON = (3, 12)
SUPPORTED_SYSTEM = "Darwin"


class HostCheckError(Exception):
    """Raised when the host cannot be provisioned by this tool."""


def check_host(
    system_name: str | None = None,
    version_info: tuple[int, ...] | None = None,
) -> None:
    """Refuse to run anywhere but a supported macOS host and interpreter.

    Args:
        system_name: Override for ``platform.system()``
        version_info: Override for ``sys.version_info``

    Raises:
        HostCheckError: If the OS or interpreter is not supported
    """
    if version_info is None:
        version_info = tuple(sys.version_info)
    if tuple(version_info[:2]) < MIN_PYTHON:
        required = ".".join(str(part) for part in MIN_PYTHON)
        raise HostCheckError(f"Please run this tool with Python {required} or newer")

    if system_name is None:
        system_name = platform.system()
    if system_name != SUPPORTED_SYSTEM:
        raise HostCheckError("This tool is only for macOS")
