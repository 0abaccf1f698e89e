"""Unit tests for the provisioner."""

from pathlib import Path

import pytest

from setupmac.core.profile import ProfileBuilder
from setupmac.core.provisioner import Provisioner
from setupmac.core.step import ProvisioningAborted, Step, StepStatus
from setupmac.system.command import CommandError
from setupmac.system.download import DownloadError


class FakeStep:
    """Step with a scripted probe and action."""

    def __init__(
        self,
        name: str,
        log: list[str],
        required: bool = True,
        satisfied: bool = False,
        probe_error: Exception | None = None,
        apply_error: Exception | None = None,
        lines: list[str] | None = None,
        skip_lines: list[str] | None = None,
        title: str | None = None,
    ) -> None:
        self._name = name
        self._log = log
        self._required = required
        self._satisfied = satisfied
        self._probe_error = probe_error
        self._apply_error = apply_error
        self._lines = lines or []
        self._skip_lines = skip_lines or []
        self._title = title or f"Setting up {name}"

    def name(self) -> str:
        return self._name

    def title(self) -> str:
        return self._title

    def required(self) -> bool:
        return self._required

    def prerequisites(self) -> list[str]:
        return []

    async def is_satisfied(self) -> bool:
        self._log.append(f"probe {self._name}")
        if self._probe_error:
            raise self._probe_error
        return self._satisfied

    async def apply(self) -> None:
        self._log.append(f"apply {self._name}")
        if self._apply_error:
            raise self._apply_error

    def profile_lines(self, status: StepStatus) -> list[str]:
        if status is StepStatus.INSTALLED:
            return self._lines
        if status is StepStatus.SKIPPED:
            return self._skip_lines
        return []

    def skip_message(self) -> str:
        return f"{self._name} already installed"

    def success_message(self) -> str:
        return f"{self._name} installed"


@pytest.fixture
def profile() -> ProfileBuilder:
    return ProfileBuilder(Path(".zprofile"), header=[])


class TestProvisioner:
    """Tests for Provisioner."""

    def test_fake_step_implements_protocol(self) -> None:
        assert isinstance(FakeStep("a", []), Step)

    @pytest.mark.asyncio
    async def test_runs_steps_in_order(self, reporter, profile) -> None:
        """Test that steps are probed and applied strictly in order."""
        log: list[str] = []
        steps = [
            FakeStep("homebrew", log, lines=["brew line"]),
            FakeStep("gh", log, satisfied=True),
            FakeStep("go", log, required=False, lines=["go line"]),
        ]

        result = await Provisioner(reporter).run(steps, profile)

        assert log == ["probe homebrew", "apply homebrew", "probe gh", "probe go", "apply go"]
        assert [r.name for r in result.results] == ["homebrew", "gh", "go"]
        assert result.status_of("homebrew") is StepStatus.INSTALLED
        assert result.status_of("gh") is StepStatus.SKIPPED
        assert result.status_of("go") is StepStatus.INSTALLED
        assert profile.lines == ["brew line", "go line"]
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_required_failure_aborts(self, reporter, profile, console_output) -> None:
        """Test that a failing required step stops the run."""
        log: list[str] = []
        steps = [
            FakeStep("homebrew", log, lines=["brew line"]),
            FakeStep("docker", log, apply_error=CommandError("hdiutil attach", 1, "no space\n")),
            FakeStep("rbenv", log),
        ]

        with pytest.raises(ProvisioningAborted) as excinfo:
            await Provisioner(reporter).run(steps, profile)

        assert excinfo.value.step == "docker"
        result = excinfo.value.result
        assert result.aborted
        assert result.failed
        assert result.exit_code == 1
        assert result.status_of("rbenv") is None
        assert "probe rbenv" not in log
        assert profile.lines == ["brew line"]
        output = console_output.getvalue()
        assert "Setting up docker failed" in output
        assert "no space" in output

    @pytest.mark.asyncio
    async def test_optional_failure_continues(self, reporter, profile, console_output) -> None:
        """Test that a failing optional step is recorded and the run continues."""
        log: list[str] = []
        steps = [
            FakeStep("nvm", log, required=False, apply_error=DownloadError("https://x", 500)),
            FakeStep("go", log, required=False, lines=["go line"]),
        ]

        result = await Provisioner(reporter).run(steps, profile)

        assert result.status_of("nvm") is StepStatus.FAILED
        assert result.status_of("go") is StepStatus.INSTALLED
        assert not result.failed
        assert result.names(StepStatus.FAILED) == ["nvm"]
        assert profile.lines == ["go line"]
        assert "continuing anyway" in console_output.getvalue()

    @pytest.mark.asyncio
    async def test_probe_failure_treated_as_action_failure(self, reporter, profile) -> None:
        """Test that a failing probe is handled like a failing action."""
        log: list[str] = []
        steps = [
            FakeStep(
                "rust-update", log, required=False, probe_error=CommandError("rustup check", 1, "")
            ),
            FakeStep("ruby-upgrade", log, probe_error=CommandError("rbenv install -l", 1, "")),
        ]

        with pytest.raises(ProvisioningAborted) as excinfo:
            await Provisioner(reporter).run(steps, profile)

        assert excinfo.value.step == "ruby-upgrade"
        assert excinfo.value.result.status_of("rust-update") is StepStatus.FAILED
        assert "apply rust-update" not in log
        assert "apply ruby-upgrade" not in log

    @pytest.mark.asyncio
    async def test_skip_branch_profile_lines(self, reporter, profile) -> None:
        """Test that skipped steps contribute their skip-branch lines."""
        log: list[str] = []
        steps = [FakeStep("docker", log, satisfied=True, lines=["x"], skip_lines=["docker path"])]

        await Provisioner(reporter).run(steps, profile)

        assert profile.lines == ["docker path"]

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, reporter, profile) -> None:
        """Test that programming errors are not reported as step failures."""
        steps = [FakeStep("go", [], required=False, apply_error=KeyError("bug"))]

        with pytest.raises(KeyError):
            await Provisioner(reporter).run(steps, profile)

    @pytest.mark.asyncio
    async def test_each_step_gets_a_banner(self, reporter, profile, console_output) -> None:
        """Test that every step is announced with a timestamped banner."""
        log: list[str] = []
        steps = [FakeStep("homebrew", log), FakeStep("gh", log, satisfied=True)]

        await Provisioner(reporter).run(steps, profile)

        output = console_output.getvalue()
        assert output.count("Started:") == 2
        assert "gh already installed" in output
        assert "homebrew installed" in output

    @pytest.mark.asyncio
    async def test_shared_title_gets_one_banner(self, reporter, profile, console_output) -> None:
        """Test that consecutive steps of one section share a banner."""
        log: list[str] = []
        steps = [
            FakeStep("miniconda", log, title="Setting up Python Environment"),
            FakeStep("pyenv", log, title="Setting up Python Environment"),
            FakeStep("rbenv", log, title="Setting up Ruby Environment"),
        ]

        await Provisioner(reporter).run(steps, profile)

        output = console_output.getvalue()
        assert output.count("Started:") == 2
        assert output.count("Setting up Python Environment") == 1
        assert "Setting up Ruby Environment" in output
