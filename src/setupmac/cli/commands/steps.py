"""Steps command implementation."""

import typer

from setupmac.config.loader import load_config
from setupmac.config.models import ConfigOverrides
from setupmac.core.manager import Manager
from setupmac.core.report import Reporter


def run_list_steps(config_file: str, preset: str, overrides: ConfigOverrides) -> None:
    """Print the planned steps in execution order.

    Args:
        config_file: Path to configuration file
        preset: Preset name to use
        overrides: Configuration overrides from CLI/env
    """
    config = load_config(config_file=config_file, preset=preset, overrides=overrides)
    plan = Manager(config, reporter=Reporter()).build_plan()

    for index, step in enumerate(plan.steps, start=1):
        flag = "required" if step.required() else "optional"
        line = f"{index:>2}. {step.name():<20} {flag:<9} {step.title()}"
        if step.prerequisites():
            line += f" (after: {', '.join(step.prerequisites())})"
        typer.echo(line)
