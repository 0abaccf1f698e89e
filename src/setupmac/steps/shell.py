"""Interactive shell framework."""

from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import run_installer_script


class OhMyZsh(BaseStep):
    step_name = "oh-my-zsh"
    label = "Oh My Zsh"
    section = "Setting up Shell Environment"

    async def is_satisfied(self) -> bool:
        return (self.home / ".oh-my-zsh").is_dir()

    async def apply(self) -> None:
        self.reporter.info("Installing Oh My Zsh...")
        # Unattended: no shell switch and no interactive zsh at the end
        await run_installer_script(
            self.system,
            self.config.shell.oh_my_zsh_url,
            self.workdir,
            interpreter="/bin/sh",
            args=["--unattended"],
        )
