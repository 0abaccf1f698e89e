"""Unit tests for latest-stable version selection."""

import pytest

from setupmac.system.command import Command, CommandError
from setupmac.versions.catalog import (
    CommandVersionSource,
    StaticVersionSource,
    VersionCatalog,
    VersionNotFoundError,
    VersionSource,
    latest_stable,
    parse_stable,
    stable_versions,
)


class TestParseStable:
    """Tests for parse_stable."""

    def test_plain_version(self) -> None:
        assert parse_stable("3.12.4") == (3, 12, 4)

    def test_surrounding_whitespace(self) -> None:
        assert parse_stable("  2.7.18 \n") == (2, 7, 18)

    @pytest.mark.parametrize(
        "candidate",
        [
            "3.10.0b1",
            "3.11.0a1",
            "3.13.0rc1",
            "3.4.0-preview1",
            "jruby-9.4.8.0",
            "pypy3.10-7.3.17",
            "3.12",
            "3.12.4.1",
            "\u0663.\u0661\u0660.\u0660",
            "Available versions:",
            "",
        ],
    )
    def test_non_stable_rejected(self, candidate: str) -> None:
        assert parse_stable(candidate) is None


class TestLatestStable:
    """Tests for latest_stable."""

    def test_excludes_prereleases(self) -> None:
        """Test the documented example."""
        assert latest_stable(["3.9.0", "3.10.0b1", "3.10.0", "3.11.0a1"]) == "3.10.0"

    def test_numeric_not_lexicographic(self) -> None:
        """Test that 3.10 ranks above 3.9."""
        assert latest_stable(["3.10.1", "3.9.12", "3.2.0"]) == "3.10.1"

    def test_patch_ordering(self) -> None:
        assert latest_stable(["3.3.10", "3.3.9"]) == "3.3.10"

    def test_input_order_irrelevant(self) -> None:
        assert latest_stable(["3.3.5", "3.2.5", "3.1.6"]) == "3.3.5"
        assert latest_stable(["3.1.6", "3.2.5", "3.3.5"]) == "3.3.5"

    def test_ascii_digits_only(self) -> None:
        """Test that non-ASCII digits never count as a release."""
        assert latest_stable(["3.9.0", "\u0663.\u0661\u0660.\u0660"]) == "3.9.0"

    def test_strips_entries(self) -> None:
        assert latest_stable(["  3.11.9", "  3.12.4  "]) == "3.12.4"

    def test_no_stable_version(self) -> None:
        with pytest.raises(VersionNotFoundError):
            latest_stable(["3.13.0rc1", "jruby-9.4.8.0"])

    def test_empty(self) -> None:
        with pytest.raises(VersionNotFoundError):
            latest_stable([])


class TestStableVersions:
    """Tests for stable_versions."""

    def test_sorted_ascending_and_deduplicated(self) -> None:
        assert stable_versions(["3.10.0", "3.9.1", "3.10.0", "3.11.0a1"]) == ["3.9.1", "3.10.0"]


class TestVersionCatalog:
    """Tests for VersionCatalog and its sources."""

    def test_static_source_is_version_source(self) -> None:
        assert isinstance(StaticVersionSource([]), VersionSource)

    @pytest.mark.asyncio
    async def test_catalog_with_static_source(self) -> None:
        catalog = VersionCatalog(StaticVersionSource(["3.2.5", "3.3.5", "3.4.0-preview1"]), "Ruby")
        assert await catalog.latest_stable() == "3.3.5"

    @pytest.mark.asyncio
    async def test_catalog_without_stable_versions(self) -> None:
        catalog = VersionCatalog(StaticVersionSource(["3.4.0-preview1"]), "Ruby")
        with pytest.raises(VersionNotFoundError, match="No stable Ruby version"):
            await catalog.latest_stable()

    @pytest.mark.asyncio
    async def test_command_source_parses_lines(self, fake_system) -> None:
        fake_system.respond("pyenv install --list", "Available versions:\n  3.11.9\n  3.12.4\n")
        source = CommandVersionSource(fake_system, Command("pyenv", ["install", "--list"]))

        assert await source.list_versions() == ["Available versions:", "3.11.9", "3.12.4"]
        assert fake_system.commands == ["pyenv install --list"]

    @pytest.mark.asyncio
    async def test_command_source_propagates_failure(self, fake_system) -> None:
        fake_system.fail("rbenv install -l", "rbenv: command not found", returncode=127)
        catalog = VersionCatalog(
            CommandVersionSource(fake_system, Command("rbenv", ["install", "-l"])), "Ruby"
        )

        with pytest.raises(CommandError):
            await catalog.latest_stable()
