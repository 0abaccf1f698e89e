"""Latest-stable version selection over an injectable list of versions.

Version managers list every release they know about, including pre-releases
(``3.13.0rc1``), alternative implementations (``pypy3.10-7.3.17``) and
dash-qualified builds. Only plain ``MAJOR.MINOR.PATCH`` entries count as
stable, and the newest is chosen by numeric rather than textual order.
"""

import re
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from setupmac.core.logging import get_logger
from setupmac.system.command import Command
from setupmac.system.worker import Worker

logger = get_logger(__name__)

STABLE_VERSION = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)$")


class VersionNotFoundError(Exception):
    """Raised when no stable version is available."""


def parse_stable(version: str) -> tuple[int, int, int] | None:
    """Parse a stable version string.

    Args:
        version: Candidate version, surrounding whitespace ignored

    Returns:
        (major, minor, patch) or None if the entry is not a stable release
    """
    match = STABLE_VERSION.match(version.strip())
    if match is None:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch)


def stable_versions(candidates: Iterable[str]) -> list[str]:
    """Filter candidates to stable releases, sorted ascending."""
    parsed = {}
    for candidate in candidates:
        key = parse_stable(candidate)
        if key is not None:
            parsed[candidate.strip()] = key
    return sorted(parsed, key=parsed.__getitem__)


def latest_stable(candidates: Iterable[str]) -> str:
    """Pick the greatest stable version.

    Args:
        candidates: Version strings as listed by a version manager

    Returns:
        The numerically greatest ``MAJOR.MINOR.PATCH`` entry

    Raises:
        VersionNotFoundError: If no candidate is a stable release

    Example:
        >>> latest_stable(["3.9.0", "3.10.0b1", "3.10.0", "3.11.0a1"])
        '3.10.0'
    """
    versions = stable_versions(candidates)
    if not versions:
        raise VersionNotFoundError("No stable version found")
    return versions[-1]


@runtime_checkable
class VersionSource(Protocol):
    """Source of available version strings."""

    async def list_versions(self) -> list[str]:
        """List every version the source knows about.

        Raises:
            Exception: If the versions cannot be listed
        """
        ...


class StaticVersionSource:
    """Version source backed by a fixed list."""

    def __init__(self, versions: list[str]) -> None:
        self.versions = versions

    async def list_versions(self) -> list[str]:
        return list(self.versions)


class CommandVersionSource:
    """Version source that runs a listing command, one version per line."""

    def __init__(self, system: Worker, cmd: Command) -> None:
        """Initialize the source.

        Args:
            system: System worker used to run the command
            cmd: Listing command, e.g. ``rbenv install -l``
        """
        self.system = system
        self.cmd = cmd

    async def list_versions(self) -> list[str]:
        """Run the listing command.

        Raises:
            CommandError: If the command fails
        """
        output = await self.system.run(self.cmd)
        return [line.strip() for line in output.decode("utf-8", errors="replace").splitlines()]


class VersionCatalog:
    """Catalog of available versions for one runtime."""

    def __init__(self, source: VersionSource, runtime: str = "") -> None:
        """Initialize the catalog.

        Args:
            source: Where the available versions come from
            runtime: Runtime name used in messages
        """
        self.source = source
        self.runtime = runtime

    async def latest_stable(self) -> str:
        """Get the newest stable version the source offers.

        Raises:
            VersionNotFoundError: If the source lists no stable version
        """
        versions = await self.source.list_versions()
        try:
            latest = latest_stable(versions)
        except VersionNotFoundError:
            raise VersionNotFoundError(
                f"No stable {self.runtime or 'runtime'} version available"
            ) from None

        logger.debug("Selected latest stable version", runtime=self.runtime, version=latest)
        return latest
