"""Shared behaviour for provisioning steps."""

from pathlib import Path

from setupmac.config.models import SetupConfig
from setupmac.core.report import Reporter
from setupmac.core.step import StepStatus
from setupmac.system.worker import Worker


class BaseStep:
    """Base class for the built-in steps.

    Subclasses set the class attributes and implement ``is_satisfied`` and
    ``apply``. The remaining Step protocol methods are derived from the
    attributes.
    """

    step_name = ""
    label = ""
    section = ""
    is_required = False
    depends_on: tuple[str, ...] = ()
    install_profile_lines: tuple[str, ...] = ()

    def __init__(self, system: Worker, config: SetupConfig, reporter: Reporter) -> None:
        """Initialize the step.

        Args:
            system: System worker for executing commands
            config: setup-mac configuration
            reporter: Destination for progress lines
        """
        self.system = system
        self.config = config
        self.reporter = reporter

    def name(self) -> str:
        return self.step_name

    def title(self) -> str:
        return self.section or f"Setting up {self.label}"

    def required(self) -> bool:
        return self.is_required

    def prerequisites(self) -> list[str]:
        return list(self.depends_on)

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is StepStatus.INSTALLED:
            return list(self.install_profile_lines)
        return []

    def skip_message(self) -> str:
        return f"{self.label} already installed"

    def success_message(self) -> str:
        return f"{self.label} installed"

    @property
    def home(self) -> Path:
        return self.system.home_dir()

    @property
    def workdir(self) -> Path:
        """Scratch directory for downloads, relative to the home directory."""
        return Path(self.config.workdir)

    def has_command(self, executable: str) -> bool:
        return self.system.which(executable) is not None

    def adopt_binary(self, binary: Path) -> bool:
        """Put an installed binary's directory on PATH if the binary exists.

        Covers tools installed by an earlier run whose profile has not been
        sourced by the current shell.
        """
        if not binary.exists():
            return False
        self.system.add_to_path(binary.parent)
        return True

    async def is_satisfied(self) -> bool:
        raise NotImplementedError

    async def apply(self) -> None:
        raise NotImplementedError
