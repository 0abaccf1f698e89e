"""Node.js via nvm."""

import shlex

from setupmac.core.step import StepStatus
from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import run_installer_script
from setupmac.system.command import shell

NVM_PROFILE_LINES = [
    'export NVM_DIR="$HOME/.nvm"',
    '[ -s "$NVM_DIR/nvm.sh" ] && \\. "$NVM_DIR/nvm.sh"',
    '[ -s "$NVM_DIR/bash_completion" ] && \\. "$NVM_DIR/bash_completion"',
]


class Nvm(BaseStep):
    """Install nvm and the latest LTS Node.js.

    nvm is a shell function, so it is loaded from its own directory in the
    same shell that calls it rather than through the user's profile.
    """

    step_name = "nvm"
    label = "NVM"
    section = "Setting up Node.js Environment"

    async def is_satisfied(self) -> bool:
        return (self.home / ".nvm").is_dir()

    async def apply(self) -> None:
        nvm_dir = self.home / ".nvm"

        self.reporter.info("Installing NVM...")
        # PROFILE=/dev/null keeps the installer away from the user's rc files
        await run_installer_script(
            self.system,
            self.config.node.nvm_install_url,
            self.workdir,
            env={"PROFILE": "/dev/null", "NVM_DIR": str(nvm_dir)},
        )

        self.reporter.info("Installing Node.js LTS...")
        nvm_sh = shlex.quote(str(nvm_dir / "nvm.sh"))
        await self.system.run(
            shell(f'. {nvm_sh} && nvm install --lts && nvm alias default "lts/*"')
        )

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is not StepStatus.INSTALLED:
            return []
        return list(NVM_PROFILE_LINES)

    def success_message(self) -> str:
        return "NVM and Node.js LTS installed and configured"
