"""Latest command implementation."""

import asyncio

import typer

from setupmac.steps.python import python_catalog
from setupmac.steps.ruby import ruby_catalog
from setupmac.system.runner import System

CATALOGS = {
    "python": python_catalog,
    "ruby": ruby_catalog,
}


def run_latest(tool: str) -> None:
    """Print the newest stable version the tool's version manager offers.

    Args:
        tool: Runtime name (python or ruby)

    Raises:
        ValueError: If the runtime is not supported
    """
    if tool not in CATALOGS:
        raise ValueError(f"Unknown runtime '{tool}'. Available: {', '.join(CATALOGS)}")

    catalog = CATALOGS[tool](System())
    version = asyncio.run(catalog.latest_stable())
    typer.echo(version)
