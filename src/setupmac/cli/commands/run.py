"""Run command implementation."""

from setupmac.config.loader import load_config
from setupmac.config.models import ConfigOverrides
from setupmac.core.logging import get_logger
from setupmac.core.manager import Manager
from setupmac.core.report import Reporter
from setupmac.core.step import RunResult, StepStatus

logger = get_logger(__name__)


async def run_provision(
    config_file: str,
    preset: str,
    overrides: ConfigOverrides,
    reporter: Reporter,
    trace: bool = False,
) -> RunResult:
    """Execute the run command to provision the workstation.

    Args:
        config_file: Path to configuration file
        preset: Preset name to use
        overrides: Configuration overrides from CLI/env
        reporter: Destination for progress lines
        trace: Print every command with its output

    Returns:
        Results of the run

    Raises:
        ProvisioningAborted: If a required step fails
    """
    config = load_config(config_file=config_file, preset=preset, overrides=overrides)
    config.trace = trace

    logger.debug(
        "Configuration loaded",
        steps="all" if config.steps is None else ",".join(config.steps),
        skip=",".join(config.skip),
        profile=config.profile.path,
    )

    reporter.section("Starting macOS development environment setup...")
    reporter.info("This tool will install and configure various development tools.")
    reporter.info("You may be prompted for your password during installation.")

    manager = Manager(config, reporter=reporter)
    result = await manager.provision()

    logger.debug(
        "Run finished",
        installed=len(result.names(StepStatus.INSTALLED)),
        skipped=len(result.names(StepStatus.SKIPPED)),
        failed=len(result.names(StepStatus.FAILED)),
    )

    return result
