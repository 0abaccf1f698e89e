"""Ruby via rbenv, and CocoaPods on top of it."""

from setupmac.config.models import SetupConfig
from setupmac.core.logging import get_logger
from setupmac.core.report import Reporter
from setupmac.packages.brew_handler import BrewHandler
from setupmac.steps.base import BaseStep
from setupmac.system.command import Command, CommandError
from setupmac.system.worker import Worker
from setupmac.versions.catalog import CommandVersionSource, VersionCatalog

logger = get_logger(__name__)

RBENV_INIT_LINE = 'eval "$(rbenv init - zsh)"'
RBENV_LIST = Command(executable="rbenv", args=["install", "-l"])


def ruby_catalog(system: Worker) -> VersionCatalog:
    """Catalog of Ruby releases known to ruby-build."""
    return VersionCatalog(CommandVersionSource(system, RBENV_LIST), runtime="Ruby")


async def current_ruby(system: Worker) -> str:
    """Get the active rbenv Ruby version, or an empty string if unknown."""
    try:
        output = await system.run(Command(executable="rbenv", args=["version-name"]))
    except CommandError as e:
        # version-name fails when the selected version is not installed
        logger.debug("Could not read active Ruby version", error=str(e))
        return ""
    return output.decode("utf-8", errors="replace").strip()


async def install_ruby(system: Worker, reporter: Reporter, version: str) -> None:
    """Install a Ruby version with rbenv and make it the global default.

    Raises:
        CommandError: If installation or activation fails
    """
    reporter.info(f"Installing Ruby {version}...")
    await system.run(Command(executable="rbenv", args=["install", "-s", version]))

    reporter.info(f"Setting Ruby {version} as global default...")
    await system.run(Command(executable="rbenv", args=["global", version]))
    await system.run(Command(executable="rbenv", args=["rehash"]))

    location = await system.run(Command(executable="rbenv", args=["which", "ruby"]))
    reporter.info(f"Ruby location: {location.decode().strip()}")
    banner = await system.run(Command(executable="ruby", args=["-v"]))
    reporter.info(f"Ruby version: {banner.decode().strip()}")


class Rbenv(BaseStep):
    step_name = "rbenv"
    label = "rbenv"
    section = "Setting up Ruby Environment"
    is_required = True
    depends_on = ("homebrew",)
    install_profile_lines = (RBENV_INIT_LINE,)

    def __init__(self, system: Worker, config: SetupConfig, reporter: Reporter) -> None:
        super().__init__(system, config, reporter)
        self.installed_version = ""

    async def is_satisfied(self) -> bool:
        if self.has_command("rbenv"):
            self.system.add_to_path(self.home / ".rbenv" / "shims")
            return True
        return False

    async def apply(self) -> None:
        self.reporter.info("Installing rbenv...")
        await BrewHandler(self.system, ["rbenv", "ruby-build"]).install()
        self.system.add_to_path(self.home / ".rbenv" / "shims")

        latest = await ruby_catalog(self.system).latest_stable()
        await install_ruby(self.system, self.reporter, latest)
        self.installed_version = latest

    def success_message(self) -> str:
        return f"Ruby {self.installed_version} installed and set as global version"


class RubyUpgrade(BaseStep):
    """Move an existing rbenv setup to the newest stable Ruby.

    Nothing is installed when the active version already is the newest one.
    """

    step_name = "ruby-upgrade"
    label = "Ruby"
    section = "Updating to latest Ruby version"
    is_required = True
    depends_on = ("rbenv",)

    def __init__(self, system: Worker, config: SetupConfig, reporter: Reporter) -> None:
        super().__init__(system, config, reporter)
        self.latest = ""
        self.current = ""

    async def is_satisfied(self) -> bool:
        self.latest = await ruby_catalog(self.system).latest_stable()
        self.current = await current_ruby(self.system)
        return self.current == self.latest

    async def apply(self) -> None:
        self.reporter.info(f"Found newer Ruby version: {self.latest} (current: {self.current})")
        await install_ruby(self.system, self.reporter, self.latest)

    def skip_message(self) -> str:
        return f"Already using latest Ruby version: {self.current}"

    def success_message(self) -> str:
        return f"Ruby {self.latest} installed and set as global version"


class CocoaPods(BaseStep):
    step_name = "cocoapods"
    label = "CocoaPods"
    section = "Setting up CocoaPods"
    is_required = True
    depends_on = ("ruby-upgrade",)

    async def is_satisfied(self) -> bool:
        return self.has_command("pod")

    async def apply(self) -> None:
        self.reporter.info("Installing CocoaPods...")
        # rbenv exec pins the gem to the rbenv Ruby instead of the system one
        await self.system.run(
            Command(executable="rbenv", args=["exec", "gem", "install", "cocoapods"])
        )
        await self.system.run(Command(executable="rbenv", args=["rehash"]))

        if self.config.ruby.pod_setup:
            self.reporter.info("Setting up CocoaPods repo...")
            await self.system.run(Command(executable="pod", args=["setup"]))
