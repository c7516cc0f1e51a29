"""Unit tests for alias parsing, resolution and alias sources."""

import subprocess
from unittest.mock import Mock, patch

import pytest

from envmatrix.aliases import (
    CommandAliasSource,
    NullAliasSource,
    detect_alias_source,
    parse_alias_listing,
    resolve_alias,
)
from envmatrix.errors import AliasResolutionError


class TestParseAliasListing:
    """Test parsing of ``NAME => TARGET`` listings."""

    def test_parses_entries_in_order(self):
        """Test entries keep listing order."""
        listing = "3.12 => 3.12.4\n3.11 => 3.11.9\n"

        aliases = parse_alias_listing(listing)

        assert list(aliases.items()) == [("3.12", "3.12.4"), ("3.11", "3.11.9")]

    def test_ignores_lines_that_do_not_match(self):
        """Test blank and malformed lines are skipped."""
        listing = "\nsystem\n3.12 -> 3.12.4\n3.12 => 3.12.4\n"

        assert parse_alias_listing(listing) == {"3.12": "3.12.4"}

    def test_later_duplicates_overwrite(self):
        """Test a repeated alias keeps its last target."""
        listing = "latest => 3.11.9\nlatest => 3.12.4"

        assert parse_alias_listing(listing) == {"latest": "3.12.4"}

    def test_empty_listing(self):
        """Test an empty listing yields no aliases."""
        assert parse_alias_listing("") == {}


class TestResolveAlias:
    """Test alias chain resolution."""

    def test_unknown_name_is_returned_unchanged(self):
        """Test a name absent from the listing resolves to itself."""
        assert resolve_alias("3.12.4", "3.11 => 3.11.9") == "3.12.4"

    def test_empty_listing_returns_requested(self):
        """Test resolution without any aliases."""
        assert resolve_alias("3.12", "") == "3.12"

    def test_single_hop(self):
        """Test a direct alias resolves to its target."""
        assert resolve_alias("3.12", "3.12 => 3.12.4") == "3.12.4"

    def test_follows_chain_to_terminal_name(self):
        """Test a chain is followed to the name with no entry."""
        listing = "latest => 3.12\n3.12 => 3.12.4\n"

        assert resolve_alias("latest", listing) == "3.12.4"

    def test_self_mapping_terminates(self):
        """Test a name mapped to itself resolves to that name."""
        listing = "latest => 3.12\n3.12 => 3.12\n"

        assert resolve_alias("latest", listing) == "3.12"

    def test_cycle_without_self_mapping_raises(self):
        """Test a true cycle is reported instead of looping forever."""
        listing = "a => b\nb => a\n"

        with pytest.raises(AliasResolutionError, match="a => b => a"):
            resolve_alias("a", listing)

    def test_cycle_entered_from_outside_raises(self):
        """Test a chain leading into a loop is reported too."""
        listing = "latest => a\na => b\nb => a\n"

        with pytest.raises(AliasResolutionError, match="cycle"):
            resolve_alias("latest", listing)

    def test_long_chain_resolves_to_terminal_name(self):
        """Test a long non-cyclic chain is followed to its end."""
        names = [f"v{i}" for i in range(500)]
        listing = "\n".join(f"{a} => {b}" for a, b in zip(names, names[1:]))

        assert resolve_alias("v0", listing) == names[-1]


class TestAliasSources:
    """Test the alias tool collaborators."""

    def test_null_source_returns_empty_listing(self):
        """Test the absent-tool variant."""
        assert NullAliasSource().listing() == ""

    def test_command_source_returns_stdout(self):
        """Test the listing comes from the tool's stdout."""
        completed = subprocess.CompletedProcess(
            ["pyenv"],
            0,
            stdout="3.12 => 3.12.4\n",
            stderr="",
        )
        with patch("envmatrix.aliases.subprocess.run", return_value=completed) as run:
            listing = CommandAliasSource(["pyenv", "alias", "--list"]).listing()

        assert listing == "3.12 => 3.12.4\n"
        assert run.call_args[0][0] == ["pyenv", "alias", "--list"]

    def test_command_source_failure_yields_empty_listing(self):
        """Test a failing tool behaves like no aliases."""
        completed = subprocess.CompletedProcess(["pyenv"], 1, stdout="", stderr="no")
        with patch("envmatrix.aliases.subprocess.run", return_value=completed):
            assert CommandAliasSource().listing() == ""

    def test_command_source_oserror_yields_empty_listing(self):
        """Test a tool that cannot be started behaves like no aliases."""
        with patch("envmatrix.aliases.subprocess.run", side_effect=OSError("boom")):
            assert CommandAliasSource().listing() == ""

    def test_command_source_rejects_empty_command(self):
        """Test construction fails without a command."""
        with pytest.raises(ValueError):
            CommandAliasSource([])

    def test_detect_uses_command_source_when_tool_installed(self):
        """Test detection picks the command variant when the tool is on PATH."""
        with patch("envmatrix.aliases.shutil.which", return_value="/usr/bin/pyenv"):
            source = detect_alias_source(["pyenv", "alias", "--list"])

        assert isinstance(source, CommandAliasSource)
        assert source.command == ["pyenv", "alias", "--list"]

    def test_detect_falls_back_to_null_source(self):
        """Test detection picks the null variant when the tool is missing."""
        with patch("envmatrix.aliases.shutil.which", return_value=None):
            source = detect_alias_source(["pyenv", "alias", "--list"])

        assert isinstance(source, NullAliasSource)

    def test_detect_is_not_cached(self):
        """Test every detection consults PATH again."""
        which = Mock(side_effect=[None, "/usr/bin/pyenv"])
        with patch("envmatrix.aliases.shutil.which", which):
            first = detect_alias_source()
            second = detect_alias_source()

        assert isinstance(first, NullAliasSource)
        assert isinstance(second, CommandAliasSource)
