"""Built-in configuration presets for setup-mac."""

from setupmac.config.models import SetupConfig

ESSENTIAL_STEPS = [
    "macos-defaults",
    "rosetta",
    "xcode-clt",
    "homebrew",
    "gh",
    "oh-my-zsh",
]

TOOLCHAIN_STEPS = [
    "miniconda",
    "pyenv",
    "nvm",
    "go",
    "rbenv",
    "ruby-upgrade",
    "cocoapods",
    "rustup",
    "rust-update",
    "cargo-crates",
    "rustup-components",
]


def _full_preset() -> SetupConfig:
    """Every step, in the standard order."""
    return SetupConfig()


def _essentials_preset() -> SetupConfig:
    """OS preferences, Homebrew and the shell, without language toolchains."""
    return SetupConfig(steps=ESSENTIAL_STEPS.copy())


def _headless_preset() -> SetupConfig:
    """Command-line tooling only: no preference changes and no GUI applications."""
    return SetupConfig(
        steps=[
            *(name for name in ESSENTIAL_STEPS if name != "macos-defaults"),
            *TOOLCHAIN_STEPS,
        ]
    )


PRESETS: dict[str, SetupConfig] = {
    "full": _full_preset(),
    "essentials": _essentials_preset(),
    "headless": _headless_preset(),
}


def get_available_presets() -> list[str]:
    """Get list of available preset names.

    Returns:
        List of preset names
    """
    return list(PRESETS.keys())


def get_preset(name: str) -> SetupConfig:
    """Get a configuration preset by name.

    Args:
        name: Preset name (full, essentials, headless)

    Returns:
        Deep copy of the preset configuration

    Raises:
        ValueError: If preset name is not recognized
    """
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available presets: {', '.join(PRESETS.keys())}")
    return PRESETS[name].model_copy(deep=True)
