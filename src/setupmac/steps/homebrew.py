"""Homebrew and tools installed straight from it."""

from pathlib import Path

from setupmac.core.step import StepStatus
from setupmac.packages.brew_handler import BrewHandler
from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import run_installer_script
from setupmac.system.command import Command


class Homebrew(BaseStep):
    step_name = "homebrew"
    label = "Homebrew"
    is_required = True
    depends_on = ("xcode-clt",)

    @property
    def bin_dir(self) -> Path:
        return Path(self.config.homebrew.prefix) / "bin"

    async def is_satisfied(self) -> bool:
        return self.has_command("brew") or self.adopt_binary(self.bin_dir / "brew")

    async def apply(self) -> None:
        self.reporter.info("Installing Homebrew...")
        # The unattended installer only proceeds with cached sudo credentials
        self.reporter.info("Homebrew needs administrator access, enter your password if prompted")
        await self.system.run(Command(executable="sudo", args=["-v"], interactive=True))
        await run_installer_script(
            self.system,
            self.config.homebrew.install_url,
            self.workdir,
            env={"NONINTERACTIVE": "1"},
        )
        self.system.add_to_path(self.bin_dir)

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is not StepStatus.INSTALLED:
            return []
        return [f'eval "$({self.bin_dir / "brew"} shellenv)"']

    def success_message(self) -> str:
        return "Homebrew installed and configured"


class BrewFormulaStep(BaseStep):
    """Step satisfied by a binary on PATH and installed with ``brew install``."""

    binary = ""
    formulae: tuple[str, ...] = ()
    depends_on = ("homebrew",)

    async def is_satisfied(self) -> bool:
        return self.has_command(self.binary)

    async def apply(self) -> None:
        self.reporter.info(f"Installing {self.label}...")
        await BrewHandler(self.system, list(self.formulae)).install()


class GitHubCLI(BrewFormulaStep):
    step_name = "gh"
    label = "GitHub CLI"
    is_required = True
    binary = "gh"
    formulae = ("gh",)
