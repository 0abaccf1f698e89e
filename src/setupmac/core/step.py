"""Step protocol and run results.

A step is one idempotent unit of provisioning work: a capability probe, an
action, and the profile lines it contributes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class StepStatus(str, Enum):
    """Outcome of a single step."""

    SKIPPED = "skipped"
    INSTALLED = "installed"
    FAILED = "failed"


@runtime_checkable
class Step(Protocol):
    """Protocol for provisioning steps."""

    def name(self) -> str:
        """Get the unique step name (used by presets and --skip)."""
        ...

    def title(self) -> str:
        """Get the section title announced before the step runs."""
        ...

    def required(self) -> bool:
        """Check whether a failure of this step aborts the run."""
        ...

    def prerequisites(self) -> list[str]:
        """Get the names of steps that must run before this one."""
        ...

    async def is_satisfied(self) -> bool:
        """Probe whether the step's outcome is already in place.

        Raises:
            Exception: If the probe itself cannot be evaluated
        """
        ...

    async def apply(self) -> None:
        """Perform the step's action.

        Raises:
            Exception: If any external invocation fails
        """
        ...

    def profile_lines(self, status: StepStatus) -> list[str]:
        """Get the profile lines contributed for a given outcome."""
        ...

    def skip_message(self) -> str:
        """Get the message reported when the step is skipped."""
        ...

    def success_message(self) -> str:
        """Get the message reported when the action succeeds."""
        ...


@dataclass
class StepResult:
    """Recorded outcome of one step."""

    name: str
    status: StepStatus
    required: bool = False
    error: str = ""


@dataclass
class RunResult:
    """Aggregate outcome of a provisioning run."""

    results: list[StepResult] = field(default_factory=list)
    aborted: bool = False

    def record(self, result: StepResult) -> None:
        self.results.append(result)

    def status_of(self, name: str) -> StepStatus | None:
        """Get the recorded status of a step, or None if it never ran."""
        for result in self.results:
            if result.name == name:
                return result.status
        return None

    def names(self, status: StepStatus) -> list[str]:
        """Names of steps that ended with the given status, in run order."""
        return [r.name for r in self.results if r.status is status]

    @property
    def failed(self) -> bool:
        """True if any required step failed."""
        return any(r.required and r.status is StepStatus.FAILED for r in self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


class ProvisioningAborted(Exception):
    """Raised when a required step fails and the run stops.

    Attributes:
        step: Name of the failed step
        result: Results recorded up to and including the failure
    """

    def __init__(self, step: str, result: RunResult) -> None:
        self.step = step
        self.result = result
        super().__init__(f"Required step '{step}' failed")
