"""Rust toolchain, its updates and its add-ons."""

from setupmac.config.models import CrateConfig, SetupConfig
from setupmac.core.report import Reporter
from setupmac.steps.base import BaseStep
from setupmac.system.artifacts import run_installer_script
from setupmac.system.command import Command, CommandError
from setupmac.system.worker import Worker

CARGO_PROFILE_LINES = (
    'export PATH="$HOME/.cargo/bin:$PATH"',
    'source "$HOME/.cargo/env"',
)
UPDATE_MARKER = "Update available"


class Rustup(BaseStep):
    step_name = "rustup"
    label = "Rust"
    section = "Setting up Rust Environment"
    is_required = True
    install_profile_lines = CARGO_PROFILE_LINES

    def __init__(self, system: Worker, config: SetupConfig, reporter: Reporter) -> None:
        super().__init__(system, config, reporter)
        self.versions: list[str] = []

    async def is_satisfied(self) -> bool:
        installed = self.has_command("rustc") or self.adopt_binary(
            self.home / ".cargo" / "bin" / "rustc"
        )
        if installed:
            self.versions = await self._tool_versions()
        return installed

    async def apply(self) -> None:
        self.reporter.info("Installing Rust...")
        await run_installer_script(
            self.system,
            self.config.rust.rustup_url,
            self.workdir,
            interpreter="/bin/sh",
            args=["-y"],
        )
        self.system.add_to_path(self.home / ".cargo" / "bin")

        for line in await self._tool_versions():
            self.reporter.info(line)

    async def _tool_versions(self) -> list[str]:
        lines = []
        for tool in ("rustc", "cargo"):
            version = await self.system.run(Command(executable=tool, args=["--version"]))
            lines.append(f"{tool.capitalize()} version: {version.decode().strip()}")
        return lines

    def skip_message(self) -> str:
        return "; ".join(["Rust already installed", *self.versions])

    def success_message(self) -> str:
        return "Rust installed successfully"


class RustUpdate(BaseStep):
    step_name = "rust-update"
    label = "Rust"
    section = "Updating Rust"
    depends_on = ("rustup",)

    async def is_satisfied(self) -> bool:
        try:
            output = await self.system.run(Command(executable="rustup", args=["check"]))
        except CommandError as e:
            # Newer rustup releases exit non-zero when an update is pending
            if UPDATE_MARKER in e.output:
                return False
            raise
        return UPDATE_MARKER not in output.decode("utf-8", errors="replace")

    async def apply(self) -> None:
        self.reporter.info("Updating Rust...")
        await self.system.run(Command(executable="rustup", args=["update"]))

    def skip_message(self) -> str:
        return "Rust toolchains are up to date"

    def success_message(self) -> str:
        return "Rust updated successfully"


class CargoCrate(BaseStep):
    """Install a cargo subcommand crate, detected by the binary it provides."""

    section = "Installing common Rust tools"
    depends_on = ("rustup",)

    def __init__(
        self, system: Worker, config: SetupConfig, reporter: Reporter, crate: CrateConfig
    ) -> None:
        super().__init__(system, config, reporter)
        self.crate = crate
        self.step_name = crate.name
        self.label = crate.name

    async def is_satisfied(self) -> bool:
        return self.has_command(self.crate.binary)

    async def apply(self) -> None:
        self.reporter.info(f"Installing {self.crate.name}...")
        await self.system.run(Command(executable="cargo", args=["install", self.crate.name]))


class RustupComponent(BaseStep):
    section = "Installing common Rust tools"
    depends_on = ("rustup",)

    def __init__(
        self, system: Worker, config: SetupConfig, reporter: Reporter, component: str
    ) -> None:
        super().__init__(system, config, reporter)
        self.component = component
        self.step_name = component
        self.label = component

    async def is_satisfied(self) -> bool:
        output = await self.system.run(
            Command(executable="rustup", args=["component", "list", "--installed"])
        )
        # Entries carry the target triple, e.g. clippy-aarch64-apple-darwin
        for line in output.decode("utf-8", errors="replace").splitlines():
            line = line.strip()
            if line == self.component or line.startswith(f"{self.component}-"):
                return True
        return False

    async def apply(self) -> None:
        self.reporter.info(f"Installing {self.component}...")
        await self.system.run(
            Command(executable="rustup", args=["component", "add", self.component])
        )
