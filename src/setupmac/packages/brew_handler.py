"""Homebrew package handler for installing formulae and casks."""

from setupmac.core.logging import get_logger
from setupmac.system.command import Command
from setupmac.system.worker import Worker

logger = get_logger(__name__)


class BrewHandler:
    """Handler for installing packages with Homebrew.

    All packages are passed to a single ``brew install`` invocation, so a
    failure of any one of them fails the whole install.
    """

    def __init__(self, system: Worker, packages: list[str], cask: bool = False) -> None:
        """Initialize the BrewHandler.

        Args:
            system: System worker for executing commands
            packages: Formula or cask names to install
            cask: Install the packages as casks
        """
        self.system = system
        self.packages = packages
        self.cask = cask

    async def install(self) -> None:
        """Install all configured packages.

        Raises:
            CommandError: If brew fails
        """
        if not self.packages:
            return

        args = ["install"]
        if self.cask:
            args.append("--cask")
        args.extend(self.packages)

        await self.system.run(Command(executable="brew", args=args))

        logger.debug("Installed Homebrew packages", packages=",".join(self.packages), cask=self.cask)
