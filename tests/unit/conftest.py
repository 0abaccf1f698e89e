"""Shared fixtures for unit tests."""

import io
from pathlib import Path

import pytest
from fakes import FakeSystem
from rich.console import Console

from setupmac.core.report import Reporter


@pytest.fixture
def fake_system(tmp_path: Path) -> FakeSystem:
    home = tmp_path / "home"
    home.mkdir()
    return FakeSystem(home)


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(console_output: io.StringIO) -> Reporter:
    console = Console(file=console_output, force_terminal=False, width=200)
    return Reporter(console=console)
