"""Steps that configure macOS itself."""

from pathlib import Path

from setupmac.core.logging import get_logger
from setupmac.steps.base import BaseStep
from setupmac.system.command import Command, CommandError

logger = get_logger(__name__)


class MacOSDefaults(BaseStep):
    """Apply Finder, input, UI and screenshot preferences via ``defaults``."""

    step_name = "macos-defaults"
    label = "macOS preferences"
    section = "Configuring macOS System Preferences"

    async def is_satisfied(self) -> bool:
        macos = self.config.macos

        for directory in macos.directories:
            if not (self.home / directory).is_dir():
                return False

        for setting in macos.settings:
            try:
                output = await self.system.run(
                    Command(executable="defaults", args=setting.read_args())
                )
            except CommandError:
                # Key not present in the domain yet
                return False

            current = output.decode("utf-8", errors="replace").strip()
            if current != setting.expected_read(self.home):
                logger.debug(
                    "Preference differs",
                    domain=setting.domain,
                    key=setting.key,
                    current=current,
                )
                return False

        return True

    async def apply(self) -> None:
        macos = self.config.macos

        for directory in macos.directories:
            await self.system.mk_home_subdir(Path(directory))

        self.reporter.info("Writing preferences...")
        for setting in macos.settings:
            await self.system.run(
                Command(executable="defaults", args=setting.write_args(self.home))
            )

        self.reporter.info("Applying changes...")
        for app in macos.restart_apps:
            try:
                await self.system.run(Command(executable="killall", args=[app]))
            except CommandError:
                # Not running, nothing to restart
                logger.debug("Application not restarted", app=app)

    def skip_message(self) -> str:
        return "macOS preferences already configured"

    def success_message(self) -> str:
        return "macOS preferences configured successfully"


class Rosetta(BaseStep):
    step_name = "rosetta"
    label = "Rosetta 2"
    section = "Installing Rosetta 2"

    async def is_satisfied(self) -> bool:
        return await self.system.succeeds(
            Command(executable="pkgutil", args=["--pkg-info=com.apple.pkg.RosettaUpdateAuto"])
        )

    async def apply(self) -> None:
        self.reporter.info("Installing Rosetta 2...")
        await self.system.run(
            Command(
                executable="softwareupdate",
                args=["--install-rosetta", "--agree-to-license"],
            )
        )


class XcodeCommandLineTools(BaseStep):
    """Trigger the Command Line Tools installer.

    ``xcode-select --install`` only opens the system installer dialog; the
    tools themselves arrive asynchronously.
    """

    step_name = "xcode-clt"
    label = "XCode Command Line Tools"
    section = "Installing XCode Command Line Tools"

    async def is_satisfied(self) -> bool:
        return await self.system.succeeds(Command(executable="xcode-select", args=["-p"]))

    async def apply(self) -> None:
        await self.system.run(Command(executable="xcode-select", args=["--install"]))
