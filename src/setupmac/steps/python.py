"""Python toolchains: Miniconda and pyenv."""

from pathlib import Path

from setupmac.config.models import SetupConfig
from setupmac.core.report import Reporter
from setupmac.core.step import StepStatus
from setupmac.packages.brew_handler import BrewHandler
from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import temporary_download
from setupmac.system.command import Command
from setupmac.system.worker import Worker
from setupmac.versions.catalog import CommandVersionSource, VersionCatalog

PYENV_LIST = Command(executable="pyenv", args=["install", "--list"])


def python_catalog(system: Worker) -> VersionCatalog:
    """Catalog of CPython releases known to pyenv."""
    return VersionCatalog(CommandVersionSource(system, PYENV_LIST), runtime="Python")


class Miniconda(BaseStep):
    step_name = "miniconda"
    label = "Miniconda"
    section = "Setting up Python Environment"
    is_required = True

    @property
    def install_dir(self) -> Path:
        return self.home / self.config.python.miniconda_dir

    async def is_satisfied(self) -> bool:
        return self.has_command("conda") or self.adopt_binary(self.install_dir / "bin" / "conda")

    async def apply(self) -> None:
        self.reporter.info("Installing Miniconda...")
        url = self.config.python.miniconda_url
        filename = url.rsplit("/", 1)[-1]

        async with temporary_download(self.system, url, self.workdir, filename) as installer:
            await self.system.run(
                Command(
                    executable="/bin/bash",
                    args=[str(installer), "-b", "-p", str(self.install_dir)],
                )
            )

        conda = self.install_dir / "bin" / "conda"
        await self.system.run(Command(executable=str(conda), args=["init", "zsh"]))
        self.system.add_to_path(conda.parent)

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is not StepStatus.INSTALLED:
            return []
        return [f'export PATH="$HOME/{self.config.python.miniconda_dir}/bin:$PATH"']

    def success_message(self) -> str:
        return "Miniconda installed and configured"


class Pyenv(BaseStep):
    """Install pyenv and make the newest stable CPython the global default.

    The configured extra versions (Python 2.7 by default) are installed
    alongside and stay available as secondary globals.
    """

    step_name = "pyenv"
    label = "Pyenv"
    section = "Setting up Python Environment"
    is_required = True
    depends_on = ("homebrew",)

    def __init__(self, system: Worker, config: SetupConfig, reporter: Reporter) -> None:
        super().__init__(system, config, reporter)
        self.installed_version = ""

    async def is_satisfied(self) -> bool:
        return self.has_command("pyenv")

    async def apply(self) -> None:
        self.reporter.info("Installing Pyenv...")
        await BrewHandler(self.system, ["pyenv"]).install()
        self.system.add_to_path(self.home / ".pyenv" / "shims")

        latest = await python_catalog(self.system).latest_stable()
        versions = [latest, *self.config.python.extra_versions]

        self.reporter.info(f"Installing Python {', '.join(versions)}...")
        await self.system.run(Command(executable="pyenv", args=["install", "-s", *versions]))
        await self.system.run(Command(executable="pyenv", args=["global", *versions]))
        self.installed_version = latest

    def success_message(self) -> str:
        return f"Pyenv installed and configured (Python {self.installed_version})"
