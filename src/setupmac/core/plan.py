"""Plan: the ordered list of steps a run will execute."""

from setupmac.config.models import SetupConfig
from setupmac.core.logging import get_logger
from setupmac.core.report import Reporter
from setupmac.core.step import Step
from setupmac.steps.factory import STEP_ORDER, create_steps
from setupmac.system.worker import Worker

logger = get_logger(__name__)


def validate_order(steps: list[Step]) -> None:
    """Check every step's prerequisites against the plan's order.

    A prerequisite scheduled after its dependant is an error. A prerequisite
    missing from the plan is assumed to be present already and only logged.

    Args:
        steps: Steps in execution order

    Raises:
        ValueError: If a step is scheduled before one of its prerequisites
            or two steps share a name
    """
    positions: dict[str, int] = {}
    for index, step in enumerate(steps):
        if step.name() in positions:
            raise ValueError(f"Step '{step.name()}' appears more than once")
        positions[step.name()] = index

    for index, step in enumerate(steps):
        for prerequisite in step.prerequisites():
            if prerequisite not in positions:
                logger.warning(
                    "Prerequisite is not part of this run; assuming it is already present",
                    step=step.name(),
                    prerequisite=prerequisite,
                )
                continue

            if positions[prerequisite] > index:
                raise ValueError(
                    f"Step '{step.name()}' is scheduled before its prerequisite '{prerequisite}'"
                )


class Plan:
    """Plan represents the steps to execute, in their fixed order.

    The enabled set comes from the configuration (all steps when it names
    none) minus the skipped names; the order always follows the registry.
    """

    def __init__(self, config: SetupConfig, system: Worker, reporter: Reporter) -> None:
        """Initialize the Plan.

        Args:
            config: setup-mac configuration
            system: System worker
            reporter: Destination for progress lines

        Raises:
            ValueError: If the configuration names unknown steps or the
                resulting order violates a prerequisite
        """
        self.config = config
        self.system = system

        enabled = STEP_ORDER if config.steps is None else config.steps
        unknown = [name for name in enabled if name not in STEP_ORDER]
        if unknown:
            raise ValueError(
                f"Unknown step(s): {', '.join(unknown)}. Available steps: {', '.join(STEP_ORDER)}"
            )

        candidates: list[tuple[str, Step]] = []
        for group in STEP_ORDER:
            if group not in enabled:
                continue
            for step in create_steps(group, system, config, reporter):
                candidates.append((group, step))

        known = set(STEP_ORDER) | {step.name() for _, step in candidates}
        unknown_skips = [name for name in config.skip if name not in known]
        if unknown_skips:
            logger.warning("Ignoring unknown skipped step(s)", steps=",".join(unknown_skips))

        self.steps: list[Step] = []
        for group, step in candidates:
            if group in config.skip or step.name() in config.skip:
                logger.info("Skipping step by request", step=step.name())
                continue
            self.steps.append(step)

        validate_order(self.steps)

    def names(self) -> list[str]:
        return [step.name() for step in self.steps]
