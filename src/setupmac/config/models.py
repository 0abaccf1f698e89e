"""Configuration models for setup-mac using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

HOME_PLACEHOLDER = "{home}"


class ConfigOverrides(BaseModel):
    """CLI flag and environment variable overrides for configuration."""

    skip_steps: list[str] = Field(default_factory=list)
    profile_path: str = ""
    docker_dmg_url: str = ""
    launch_wait: float | None = None


class DefaultsSetting(BaseModel):
    """One key in the macOS preferences database.

    ``{home}`` in string values is replaced with the user's home directory.
    """

    model_config = {"populate_by_name": True}

    domain: str
    key: str
    value: bool | int | float | str
    value_type: Literal["bool", "int", "float", "string"] | None = Field(None, alias="type")

    def rendered_value(self, home: Path) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value).replace(HOME_PLACEHOLDER, str(home))

    def write_args(self, home: Path) -> list[str]:
        """Arguments for ``defaults`` that write this setting."""
        args = ["write", self.domain, self.key]
        if self.value_type:
            args.append(f"-{self.value_type}")
        args.append(self.rendered_value(home))
        return args

    def read_args(self) -> list[str]:
        """Arguments for ``defaults`` that read this setting back."""
        return ["read", self.domain, self.key]

    def expected_read(self, home: Path) -> str:
        """What ``defaults read`` prints once the setting is applied."""
        if isinstance(self.value, bool):
            return "1" if self.value else "0"
        return self.rendered_value(home)


DEFAULT_MACOS_SETTINGS = [
    # Finder
    DefaultsSetting(domain="com.apple.finder", key="AppleShowAllFiles", value="YES"),
    DefaultsSetting(
        domain="NSGlobalDomain", key="AppleShowAllExtensions", value=True, value_type="bool"
    ),
    DefaultsSetting(domain="com.apple.finder", key="ShowPathbar", value=True, value_type="bool"),
    DefaultsSetting(
        domain="com.apple.finder", key="ShowStatusBar", value=True, value_type="bool"
    ),
    # Mouse: middle click opens Mission Control
    DefaultsSetting(
        domain="com.apple.driver.AppleBluetoothMultitouch.mouse",
        key="MouseButtonMode",
        value="TwoButton",
        value_type="string",
    ),
    DefaultsSetting(
        domain="com.apple.driver.AppleBluetoothMultitouch.mouse",
        key="MouseButtonDivision",
        value=55,
        value_type="int",
    ),
    DefaultsSetting(
        domain="com.apple.driver.AppleBluetoothMultitouch.mouse",
        key="MouseMissionControl",
        value=2,
        value_type="int",
    ),
    # Keyboard
    DefaultsSetting(
        domain="NSGlobalDomain", key="ApplePressAndHoldEnabled", value=False, value_type="bool"
    ),
    DefaultsSetting(domain="NSGlobalDomain", key="KeyRepeat", value=2, value_type="int"),
    DefaultsSetting(domain="NSGlobalDomain", key="InitialKeyRepeat", value=15, value_type="int"),
    # UI
    DefaultsSetting(
        domain="com.apple.menuextra.battery", key="ShowPercent", value="YES", value_type="string"
    ),
    DefaultsSetting(
        domain="NSGlobalDomain",
        key="NSNavPanelExpandedStateForSaveMode",
        value=True,
        value_type="bool",
    ),
    DefaultsSetting(
        domain="NSGlobalDomain",
        key="NSNavPanelExpandedStateForSaveMode2",
        value=True,
        value_type="bool",
    ),
    DefaultsSetting(
        domain="NSGlobalDomain", key="PMPrintingExpandedStateForPrint", value=True, value_type="bool"
    ),
    DefaultsSetting(
        domain="NSGlobalDomain",
        key="PMPrintingExpandedStateForPrint2",
        value=True,
        value_type="bool",
    ),
    # Screenshots
    DefaultsSetting(
        domain="com.apple.screencapture",
        key="location",
        value="{home}/Downloads/Screenshots",
        value_type="string",
    ),
    DefaultsSetting(
        domain="com.apple.screencapture", key="type", value="png", value_type="string"
    ),
]


class MacOSConfig(BaseModel):
    """Configuration for macOS system preferences."""

    model_config = {"populate_by_name": True}

    settings: list[DefaultsSetting] = Field(
        default_factory=lambda: [s.model_copy() for s in DEFAULT_MACOS_SETTINGS]
    )
    directories: list[str] = Field(default_factory=lambda: ["Downloads/Screenshots"])
    restart_apps: list[str] = Field(
        default_factory=lambda: ["Finder", "SystemUIServer", "Dock"], alias="restart-apps"
    )


class ProfileConfig(BaseModel):
    """Configuration for the generated shell profile."""

    path: str = ".zprofile"
    header: list[str] | None = None


class HomebrewConfig(BaseModel):
    """Configuration for Homebrew."""

    model_config = {"populate_by_name": True}

    install_url: str = Field(
        "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh", alias="install-url"
    )
    prefix: str = "/opt/homebrew"


class ShellConfig(BaseModel):
    """Configuration for the interactive shell framework."""

    model_config = {"populate_by_name": True}

    oh_my_zsh_url: str = Field(
        "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh",
        alias="oh-my-zsh-url",
    )


class PythonConfig(BaseModel):
    """Configuration for the Python toolchains."""

    model_config = {"populate_by_name": True}

    miniconda_url: str = Field(
        "https://repo.anaconda.com/miniconda/Miniconda3-latest-MacOSX-arm64.sh",
        alias="miniconda-url",
    )
    miniconda_dir: str = Field("miniconda3", alias="miniconda-dir")
    extra_versions: list[str] = Field(default_factory=lambda: ["2.7.18"], alias="extra-versions")


class NodeConfig(BaseModel):
    """Configuration for nvm and Node.js."""

    model_config = {"populate_by_name": True}

    nvm_install_url: str = Field(
        "https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.3/install.sh",
        alias="nvm-install-url",
    )


class GoConfig(BaseModel):
    """Configuration for Go."""

    workspace: str = "go"


class DockerConfig(BaseModel):
    """Configuration for Docker Desktop."""

    model_config = {"populate_by_name": True}

    dmg_url: str = Field("https://desktop.docker.com/mac/main/arm64/Docker.dmg", alias="dmg-url")
    volume: str = "/Volumes/Docker"
    app: str = "Docker.app"
    install_dir: str = Field("Applications", alias="install-dir")


class RubyConfig(BaseModel):
    """Configuration for rbenv, Ruby and CocoaPods."""

    model_config = {"populate_by_name": True}

    pod_setup: bool = Field(True, alias="pod-setup")


class OllamaConfig(BaseModel):
    """Configuration for Ollama."""

    model_config = {"populate_by_name": True}

    cask: str = "ollama"
    install_script_url: str = Field(
        "https://ollama.com/install.sh", alias="install-script-url"
    )
    launch_wait: float = Field(5.0, alias="launch-wait")


class CrateConfig(BaseModel):
    """A cargo crate and the binary that shows it is installed."""

    name: str
    binary: str


class RustConfig(BaseModel):
    """Configuration for the Rust toolchain."""

    model_config = {"populate_by_name": True}

    rustup_url: str = Field("https://sh.rustup.rs", alias="rustup-url")
    crates: list[CrateConfig] = Field(
        default_factory=lambda: [CrateConfig(name="cargo-edit", binary="cargo-add")]
    )
    components: list[str] = Field(default_factory=lambda: ["clippy", "rustfmt"])


class SetupConfig(BaseModel):
    """Main configuration for setup-mac."""

    # None runs every step
    steps: list[str] | None = None
    skip: list[str] = Field(default_factory=list)
    workdir: str = "Library/Application Support/macos-profile/tmp"

    profile: ProfileConfig = Field(default_factory=ProfileConfig)
    macos: MacOSConfig = Field(default_factory=MacOSConfig)
    homebrew: HomebrewConfig = Field(default_factory=HomebrewConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    python: PythonConfig = Field(default_factory=PythonConfig)
    node: NodeConfig = Field(default_factory=NodeConfig)
    go: GoConfig = Field(default_factory=GoConfig)
    docker: DockerConfig = Field(default_factory=DockerConfig)
    ruby: RubyConfig = Field(default_factory=RubyConfig)
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    rust: RustConfig = Field(default_factory=RustConfig)

    # Runtime fields
    overrides: ConfigOverrides = Field(default_factory=ConfigOverrides)
    trace: bool = False
