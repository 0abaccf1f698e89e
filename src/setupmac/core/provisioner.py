"""Sequential, fail-fast execution of provisioning steps."""

from setupmac.core.logging import get_logger
from setupmac.core.profile import ProfileBuilder
from setupmac.core.report import Reporter
from setupmac.core.step import (
    ProvisioningAborted,
    RunResult,
    Step,
    StepResult,
    StepStatus,
)
from setupmac.system.command import CommandError
from setupmac.system.download import DownloadError
from setupmac.versions.catalog import VersionNotFoundError

logger = get_logger(__name__)

# Failures a step can report; anything else is a bug and propagates as-is
STEP_ERRORS = (CommandError, DownloadError, VersionNotFoundError, OSError)


def _describe(error: Exception) -> str:
    if isinstance(error, CommandError) and error.output.strip():
        last_line = error.output.strip().splitlines()[-1]
        return f"{error} ({last_line})"
    return str(error)


class Provisioner:
    """Runs steps one at a time in the order given.

    Each step is probed first and skipped if already satisfied. A failing
    required step stops the run; a failing optional step is reported as a
    warning and the run continues.
    """

    def __init__(self, reporter: Reporter) -> None:
        """Initialize the Provisioner.

        Args:
            reporter: Destination for progress lines
        """
        self.reporter = reporter

    async def run(self, steps: list[Step], profile: ProfileBuilder) -> RunResult:
        """Execute the steps.

        Args:
            steps: Steps in execution order
            profile: Profile receiving each step's lines

        Returns:
            Result of every step that ran

        Raises:
            ProvisioningAborted: If a required step fails
        """
        result = RunResult()
        current_title = None

        for step in steps:
            # Steps of one section share its banner
            if step.title() != current_title:
                current_title = step.title()
                self.reporter.section(current_title)
            step_result = await self._run_step(step, profile)
            result.record(step_result)

            if step_result.status is StepStatus.FAILED and step.required():
                result.aborted = True
                raise ProvisioningAborted(step.name(), result)

        return result

    async def _run_step(self, step: Step, profile: ProfileBuilder) -> StepResult:
        name = step.name()

        try:
            if await step.is_satisfied():
                profile.extend(step.profile_lines(StepStatus.SKIPPED))
                self.reporter.info(step.skip_message())
                logger.debug("Step skipped", step=name)
                return StepResult(name, StepStatus.SKIPPED, step.required())

            await step.apply()
        except STEP_ERRORS as e:
            message = f"{step.title()} failed: {_describe(e)}"
            if step.required():
                self.reporter.error(message)
            else:
                self.reporter.warning(f"{message}, continuing anyway")
            logger.debug("Step failed", step=name, exc_info=True)
            return StepResult(name, StepStatus.FAILED, step.required(), str(e))

        profile.extend(step.profile_lines(StepStatus.INSTALLED))
        self.reporter.success(step.success_message())
        logger.debug("Step installed", step=name)
        return StepResult(name, StepStatus.INSTALLED, step.required())
