"""Scoped handling of downloaded installers and mounted disk images.

Every helper here cleans up after itself on all exit paths: downloaded files
are deleted and mounted volumes are detached even when the body raises.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from setupmac.core.logging import get_logger
from setupmac.system.command import Command, CommandError
from setupmac.system.worker import Worker

logger = get_logger(__name__)


@asynccontextmanager
async def temporary_download(
    system: Worker, url: str, workdir: Path, filename: str
) -> AsyncIterator[Path]:
    """Download a file into the work directory and delete it afterwards.

    Args:
        system: System worker
        url: Source URL
        workdir: Work directory relative to the home directory
        filename: Name of the downloaded file

    Yields:
        Absolute path of the downloaded file
    """
    await system.mk_home_subdir(workdir)
    relative = workdir / filename
    dest = system.home_dir() / relative

    try:
        await system.download(url, dest)
        yield dest
    finally:
        await system.remove_all_home(relative)


@asynccontextmanager
async def mounted_image(system: Worker, image: Path, mountpoint: str) -> AsyncIterator[Path]:
    """Attach a disk image and detach it when the block exits.

    Args:
        system: System worker
        image: Path of the .dmg file
        mountpoint: Volume path the image mounts at

    Yields:
        The mounted volume path
    """
    await system.run(
        Command(
            executable="hdiutil",
            args=["attach", str(image), "-nobrowse", "-mountpoint", mountpoint],
        )
    )

    try:
        yield Path(mountpoint)
    finally:
        try:
            await system.run(Command(executable="hdiutil", args=["detach", mountpoint]))
        except CommandError as e:
            # Keep the original failure, if any, as the one that propagates
            logger.warning("Failed to detach disk image", volume=mountpoint, error=str(e))


async def run_installer_script(
    system: Worker,
    url: str,
    workdir: Path,
    interpreter: str = "/bin/bash",
    args: list[str] | None = None,
    env: dict[str, str] | None = None,
) -> bytes:
    """Download an installer script, run it and delete it.

    Args:
        system: System worker
        url: Script URL
        workdir: Work directory relative to the home directory
        interpreter: Shell used to run the script
        args: Arguments passed to the script
        env: Extra environment for the script

    Returns:
        Script output

    Raises:
        DownloadError: If the script cannot be fetched
        CommandError: If the script exits non-zero
    """
    filename = url.rstrip("/").rsplit("/", 1)[-1] or "install.sh"

    async with temporary_download(system, url, workdir, filename) as script:
        cmd = Command(
            executable=interpreter,
            args=[str(script), *(args or [])],
            env=env or {},
        )
        return await system.run(cmd)
