"""Manager for orchestrating a provisioning run."""

from pathlib import Path

from setupmac.config.models import SetupConfig
from setupmac.core.logging import get_logger
from setupmac.core.plan import Plan
from setupmac.core.profile import ProfileBuilder
from setupmac.core.provisioner import Provisioner
from setupmac.core.report import Reporter
from setupmac.core.step import RunResult
from setupmac.system.runner import System
from setupmac.system.worker import Worker

logger = get_logger(__name__)


class Manager:
    """Manager coordinates a run: plan, profile and provisioner.

    The profile is rebuilt from its header on every run and written once
    when the run ends, including when a required step aborts it.
    """

    def __init__(
        self,
        config: SetupConfig,
        reporter: Reporter | None = None,
        system: Worker | None = None,
    ) -> None:
        """Initialize the Manager.

        Args:
            config: setup-mac configuration
            reporter: Destination for progress lines
            system: System worker (a local System by default)
        """
        self.config = config
        self.reporter = reporter or Reporter()
        self.system = system or System(trace=config.trace)
        self.plan: Plan | None = None

    def build_plan(self) -> Plan:
        """Build the plan for the current configuration.

        Raises:
            ValueError: If the configuration is inconsistent
        """
        self.plan = Plan(self.config, self.system, self.reporter)
        return self.plan

    def new_profile(self) -> ProfileBuilder:
        return ProfileBuilder(Path(self.config.profile.path), self.config.profile.header)

    async def provision(self) -> RunResult:
        """Run every planned step.

        Returns:
            Results of the run

        Raises:
            ProvisioningAborted: If a required step fails
            ValueError: If the configuration is inconsistent
        """
        plan = self.build_plan()

        self.reporter.section("Setting up Profile Environment")
        self.reporter.info("Initializing profile configuration...")
        profile = self.new_profile()
        self.reporter.success("Profile environment initialized")

        provisioner = Provisioner(self.reporter)
        try:
            return await provisioner.run(plan.steps, profile)
        finally:
            await profile.flush(self.system)
            logger.debug("Profile flushed", path=str(self.system.home_dir() / profile.path))
