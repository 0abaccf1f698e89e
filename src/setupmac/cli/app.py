"""Main CLI application for setup-mac."""

import asyncio
from typing import Annotated

import typer

from setupmac.cli.commands.latest import run_latest
from setupmac.cli.commands.run import run_provision
from setupmac.cli.commands.steps import run_list_steps
from setupmac.config.loader import get_env_overrides
from setupmac.config.models import ConfigOverrides
from setupmac.config.presets import get_available_presets
from setupmac.core.logging import setup_logging
from setupmac.core.report import Reporter
from setupmac.core.step import ProvisioningAborted, StepStatus
from setupmac.system.command import CommandError
from setupmac.system.host import HostCheckError, check_host
from setupmac.versions.catalog import VersionNotFoundError

app = typer.Typer(
    name="setup-mac",
    help="Provision a macOS development workstation",
    no_args_is_help=True,
)

ConfigOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file"),
]
PresetOption = Annotated[
    str,
    typer.Option("--preset", "-p", help="Configuration preset (full, essentials, headless)"),
]
SkipOption = Annotated[
    list[str] | None,
    typer.Option("--skip", "-s", help="Step to leave out (repeatable, comma-separated)"),
]


def split_comma_list(items: list[str]) -> list[str]:
    """Flatten repeated and comma-separated option values."""
    result = []
    for item in items:
        result.extend([s.strip() for s in item.split(",") if s.strip()])
    return result


def _validate_preset(preset: str) -> None:
    if preset:
        available = get_available_presets()
        if preset not in available:
            typer.echo(
                f"Error: Unknown preset '{preset}'. Available presets: {', '.join(available)}",
                err=True,
            )
            raise typer.Exit(code=1)


def _build_overrides(
    skip: list[str] | None,
    profile_path: str = "",
    docker_dmg_url: str = "",
    launch_wait: float | None = None,
) -> ConfigOverrides:
    """Merge CLI flags with SETUPMAC_* environment overrides.

    Scalar flags win over the environment; skip lists are combined.
    """
    env_overrides = get_env_overrides()
    return ConfigOverrides(
        skip_steps=split_comma_list(skip or []) + env_overrides.skip_steps,
        profile_path=profile_path or env_overrides.profile_path,
        docker_dmg_url=docker_dmg_url or env_overrides.docker_dmg_url,
        launch_wait=launch_wait if launch_wait is not None else env_overrides.launch_wait,
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    trace: Annotated[
        bool, typer.Option("--trace", help="Enable trace logging (most verbose)")
    ] = False,
) -> None:
    """setup-mac - macOS development workstation provisioning."""
    setup_logging(verbose=verbose, trace=trace)
    ctx.obj = {"trace": trace}


@app.command()
def run(
    ctx: typer.Context,
    config: ConfigOption = "",
    preset: PresetOption = "",
    skip: SkipOption = None,
    profile_path: Annotated[
        str,
        typer.Option("--profile-path", help="Shell profile path relative to the home directory"),
    ] = "",
    docker_dmg_url: Annotated[
        str,
        typer.Option("--docker-dmg-url", help="Docker Desktop disk image URL"),
    ] = "",
    launch_wait: Annotated[
        float | None,
        typer.Option("--launch-wait", help="Seconds to wait after launching Ollama"),
    ] = None,
) -> None:
    """Install and configure the development tools."""
    reporter = Reporter()

    try:
        check_host()
    except HostCheckError as e:
        reporter.error(str(e))
        raise typer.Exit(code=1) from e

    _validate_preset(preset)
    trace = (ctx.obj or {}).get("trace", False)

    try:
        overrides = _build_overrides(skip, profile_path, docker_dmg_url, launch_wait)
        result = asyncio.run(run_provision(config, preset, overrides, reporter, trace=trace))
    except ProvisioningAborted as e:
        reporter.error(f"Setup stopped: {e}")
        raise typer.Exit(code=1) from e
    except (ValueError, FileNotFoundError) as e:
        reporter.error(str(e))
        raise typer.Exit(code=1) from e

    reporter.finale("Setup Complete!")
    failed = result.names(StepStatus.FAILED)
    if failed:
        reporter.warning(f"Optional steps that did not complete: {', '.join(failed)}")
    reporter.success("All development tools have been installed and configured")
    reporter.info("Please restart your terminal for all changes to take effect")


@app.command()
def steps(
    config: ConfigOption = "",
    preset: PresetOption = "",
    skip: SkipOption = None,
) -> None:
    """List the steps a run would execute, in order."""
    _validate_preset(preset)

    try:
        run_list_steps(config, preset, _build_overrides(skip))
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


@app.command()
def latest(
    tool: Annotated[str, typer.Argument(help="Runtime to query (python or ruby)")],
) -> None:
    """Show the newest stable version the installed version manager offers."""
    try:
        run_latest(tool)
    except (ValueError, CommandError, VersionNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
