"""Go toolchain and workspace."""

from pathlib import Path

from setupmac.core.step import StepStatus
from setupmac.steps.homebrew import BrewFormulaStep

WORKSPACE_DIRS = ("bin", "src", "pkg")


class Go(BrewFormulaStep):
    step_name = "go"
    label = "Go"
    binary = "go"
    formulae = ("go",)

    async def apply(self) -> None:
        await super().apply()

        workspace = Path(self.config.go.workspace)
        for subdir in WORKSPACE_DIRS:
            await self.system.mk_home_subdir(workspace / subdir)

        self.system.add_to_path(self.home / workspace / "bin")

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is not StepStatus.INSTALLED:
            return []
        return [
            f'export GOPATH="$HOME/{self.config.go.workspace}"',
            'export PATH="$PATH:$GOPATH/bin"',
        ]

    def success_message(self) -> str:
        return "Go installed and configured"
