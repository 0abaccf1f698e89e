"""Registry of built-in steps in their fixed execution order."""

from collections.abc import Callable

from setupmac.config.models import SetupConfig
from setupmac.core.report import Reporter
from setupmac.core.step import Step
from setupmac.steps.docker import DockerDesktop
from setupmac.steps.go import Go
from setupmac.steps.homebrew import GitHubCLI, Homebrew
from setupmac.steps.macos import MacOSDefaults, Rosetta, XcodeCommandLineTools
from setupmac.steps.node import Nvm
from setupmac.steps.ollama import Ollama
from setupmac.steps.python import Miniconda, Pyenv
from setupmac.steps.ruby import CocoaPods, Rbenv, RubyUpgrade
from setupmac.steps.rust import CargoCrate, Rustup, RustupComponent, RustUpdate
from setupmac.steps.shell import OhMyZsh
from setupmac.system.worker import Worker

StepFactory = Callable[[Worker, SetupConfig, Reporter], list[Step]]


def _single(cls: type) -> StepFactory:
    def factory(system: Worker, config: SetupConfig, reporter: Reporter) -> list[Step]:
        return [cls(system, config, reporter)]

    return factory


def _cargo_crates(system: Worker, config: SetupConfig, reporter: Reporter) -> list[Step]:
    return [CargoCrate(system, config, reporter, crate) for crate in config.rust.crates]


def _rustup_components(system: Worker, config: SetupConfig, reporter: Reporter) -> list[Step]:
    return [
        RustupComponent(system, config, reporter, component)
        for component in config.rust.components
    ]


# Later entries may rely on earlier ones (most need Homebrew), so this order
# is part of the contract.
STEP_REGISTRY: dict[str, StepFactory] = {
    "macos-defaults": _single(MacOSDefaults),
    "rosetta": _single(Rosetta),
    "xcode-clt": _single(XcodeCommandLineTools),
    "homebrew": _single(Homebrew),
    "gh": _single(GitHubCLI),
    "oh-my-zsh": _single(OhMyZsh),
    "miniconda": _single(Miniconda),
    "pyenv": _single(Pyenv),
    "nvm": _single(Nvm),
    "go": _single(Go),
    "docker": _single(DockerDesktop),
    "rbenv": _single(Rbenv),
    "ruby-upgrade": _single(RubyUpgrade),
    "cocoapods": _single(CocoaPods),
    "ollama": _single(Ollama),
    "rustup": _single(Rustup),
    "rust-update": _single(RustUpdate),
    "cargo-crates": _cargo_crates,
    "rustup-components": _rustup_components,
}

STEP_ORDER = list(STEP_REGISTRY)


def create_steps(
    group: str,
    system: Worker,
    config: SetupConfig,
    reporter: Reporter,
) -> list[Step]:
    """Create the steps registered under a name.

    Most names map to one step; ``cargo-crates`` and ``rustup-components``
    expand to one step per configured crate or component.

    Args:
        group: Registry name
        system: System worker
        config: setup-mac configuration
        reporter: Destination for progress lines

    Returns:
        Steps in execution order

    Raises:
        ValueError: If the name is not registered
    """
    if group not in STEP_REGISTRY:
        raise ValueError(f"Unknown step '{group}'. Available steps: {', '.join(STEP_ORDER)}")
    return STEP_REGISTRY[group](system, config, reporter)
