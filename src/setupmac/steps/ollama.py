"""Ollama local model runtime."""

from setupmac.packages.brew_handler import BrewHandler
from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import run_installer_script
from setupmac.system.command import Command, CommandError
from setupmac.system.download import DownloadError


class Ollama(BaseStep):
    """Install Ollama from its Homebrew cask, falling back to the install script.

    After launching the app the run pauses for a fixed delay so the server
    is up before anything later talks to it.
    """

    step_name = "ollama"
    label = "Ollama"
    depends_on = ("homebrew",)

    async def is_satisfied(self) -> bool:
        return self.has_command("ollama")

    async def apply(self) -> None:
        ollama = self.config.ollama

        self.reporter.info("Installing Ollama using Homebrew...")
        try:
            await BrewHandler(self.system, [ollama.cask], cask=True).install()
        except CommandError:
            self.reporter.error("Failed to install Ollama via Homebrew")
            self.reporter.info("Attempting alternative installation method...")
            try:
                await run_installer_script(self.system, ollama.install_script_url, self.workdir)
            except (CommandError, DownloadError):
                self.reporter.info(
                    "Please visit https://ollama.com for manual installation instructions"
                )
                raise

        self.reporter.info("Launching Ollama...")
        await self.system.run(Command(executable="open", args=["-a", "Ollama"]))
        await self.system.sleep(ollama.launch_wait)

    def success_message(self) -> str:
        return "Ollama installed successfully"
