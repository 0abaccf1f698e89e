"""Unit tests for the Rust steps."""

import pytest

from setupmac.config.models import CrateConfig, SetupConfig
from setupmac.core.step import StepStatus
from setupmac.steps.factory import create_steps
from setupmac.steps.rust import CARGO_PROFILE_LINES, CargoCrate, Rustup, RustupComponent, RustUpdate
from setupmac.system.command import CommandError

UPDATE_PENDING = "stable-aarch64-apple-darwin - Update available : 1.79.0 -> 1.80.1\n"


class TestRustup:
    """Tests for the Rustup step."""

    @pytest.mark.asyncio
    async def test_apply(self, fake_system, reporter, console_output) -> None:
        """Test the unattended install and version report."""
        config = SetupConfig()
        fake_system.respond("rustc --version", "rustc 1.80.1 (3f5fd8dd4 2024-08-06)\n")
        fake_system.respond("cargo --version", "cargo 1.80.1 (376290515 2024-07-16)\n")
        step = Rustup(fake_system, config, reporter)

        await step.apply()

        script = fake_system.home / config.workdir / "sh.rustup.rs"
        assert fake_system.commands == [
            f"/bin/sh '{script}' -y",
            "rustc --version",
            "cargo --version",
        ]
        assert fake_system.path_entries == [fake_system.home / ".cargo" / "bin"]
        assert "Rustc version: rustc 1.80.1" in console_output.getvalue()
        assert step.profile_lines(StepStatus.INSTALLED) == list(CARGO_PROFILE_LINES)

    @pytest.mark.asyncio
    async def test_installed_toolchain_reports_versions(self, fake_system, reporter) -> None:
        """Test that an existing toolchain still has its versions shown."""
        fake_system.available.add("rustc")
        fake_system.respond("rustc --version", "rustc 1.80.1 (3f5fd8dd4 2024-08-06)\n")
        fake_system.respond("cargo --version", "cargo 1.80.1 (376290515 2024-07-16)\n")
        step = Rustup(fake_system, SetupConfig(), reporter)

        assert await step.is_satisfied()

        assert fake_system.commands == ["rustc --version", "cargo --version"]
        assert fake_system.downloads == []
        message = step.skip_message()
        assert message.startswith("Rust already installed")
        assert "Rustc version: rustc 1.80.1" in message
        assert "Cargo version: cargo 1.80.1" in message

    @pytest.mark.asyncio
    async def test_missing_toolchain_queries_nothing(self, fake_system, reporter) -> None:
        """Test that no version is queried before Rust is installed."""
        step = Rustup(fake_system, SetupConfig(), reporter)

        assert not await step.is_satisfied()
        assert fake_system.commands == []


class TestRustUpdate:
    """Tests for the RustUpdate step."""

    @pytest.mark.asyncio
    async def test_up_to_date(self, fake_system, reporter) -> None:
        """Test that no update runs when the toolchain is current."""
        fake_system.respond("rustup check", "stable-aarch64-apple-darwin - Up to date : 1.80.1\n")
        assert await RustUpdate(fake_system, SetupConfig(), reporter).is_satisfied()

    @pytest.mark.asyncio
    async def test_update_pending(self, fake_system, reporter) -> None:
        """Test that a pending update triggers rustup update."""
        fake_system.respond("rustup check", UPDATE_PENDING)
        step = RustUpdate(fake_system, SetupConfig(), reporter)

        assert not await step.is_satisfied()
        await step.apply()
        assert fake_system.commands[-1] == "rustup update"

    @pytest.mark.asyncio
    async def test_update_pending_with_nonzero_exit(self, fake_system, reporter) -> None:
        """Test rustup releases that exit non-zero when an update is pending."""
        fake_system.fail("rustup check", UPDATE_PENDING, returncode=100)
        assert not await RustUpdate(fake_system, SetupConfig(), reporter).is_satisfied()

    @pytest.mark.asyncio
    async def test_check_failure_propagates(self, fake_system, reporter) -> None:
        """Test that other rustup check failures are errors."""
        fake_system.fail("rustup check", "error: could not resolve host")
        with pytest.raises(CommandError):
            await RustUpdate(fake_system, SetupConfig(), reporter).is_satisfied()


class TestCargoCrate:
    """Tests for the CargoCrate step."""

    @pytest.mark.asyncio
    async def test_detected_by_binary(self, fake_system, reporter) -> None:
        """Test that the crate's binary, not its name, is probed."""
        crate = CrateConfig(name="cargo-edit", binary="cargo-add")
        step = CargoCrate(fake_system, SetupConfig(), reporter, crate)

        assert step.name() == "cargo-edit"
        assert not await step.is_satisfied()
        fake_system.available.add("cargo-add")
        assert await step.is_satisfied()

    @pytest.mark.asyncio
    async def test_apply(self, fake_system, reporter) -> None:
        """Test cargo install."""
        crate = CrateConfig(name="cargo-edit", binary="cargo-add")
        await CargoCrate(fake_system, SetupConfig(), reporter, crate).apply()
        assert fake_system.commands == ["cargo install cargo-edit"]


class TestRustupComponent:
    """Tests for the RustupComponent step."""

    @pytest.mark.asyncio
    async def test_installed_component(self, fake_system, reporter) -> None:
        """Test that a listed component with a target suffix is detected."""
        fake_system.respond(
            "rustup component list --installed",
            "cargo-aarch64-apple-darwin\nclippy-aarch64-apple-darwin\n",
        )
        config = SetupConfig()

        assert await RustupComponent(fake_system, config, reporter, "clippy").is_satisfied()
        assert not await RustupComponent(fake_system, config, reporter, "rustfmt").is_satisfied()

    @pytest.mark.asyncio
    async def test_apply(self, fake_system, reporter) -> None:
        """Test rustup component add."""
        await RustupComponent(fake_system, SetupConfig(), reporter, "rustfmt").apply()
        assert fake_system.commands == ["rustup component add rustfmt"]

    def test_factory_expands_components(self, fake_system, reporter) -> None:
        """Test that each configured component becomes its own step."""
        steps = create_steps("rustup-components", fake_system, SetupConfig(), reporter)
        assert [step.name() for step in steps] == ["clippy", "rustfmt"]
        assert all(not step.required() for step in steps)

    def test_factory_unknown_step(self, fake_system, reporter) -> None:
        """Test that an unknown registry name raises ValueError."""
        with pytest.raises(ValueError, match="Unknown step 'cargo'"):
            create_steps("cargo", fake_system, SetupConfig(), reporter)
