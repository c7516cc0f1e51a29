"""Integration tests for the ``envmatrix rows`` command."""

import sys
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from envmatrix_cli.cli import cli
from envmatrix_cli.core.constants import ExitCode, Icons
from envmatrix_common.io import FileOperationError


def _write_travis(root, config):
    (root / ".travis.yml").write_text(yaml.safe_dump(config), encoding="utf-8")


def _rows(root, *args):
    return CliRunner().invoke(cli, ["--root", str(root), "rows", *args])


@pytest.fixture
def no_alias_tool():
    """Pretend no alias tool is installed."""
    with patch("envmatrix.aliases.shutil.which", return_value=None):
        yield


@pytest.mark.usefixtures("no_alias_tool")
@pytest.mark.integration
class TestRowsCommand:
    """Test listing the matrix."""

    def test_lists_rows_with_compatibility(self, tmp_path, make_manifest):
        """Test compatible and skipped rows are marked."""
        make_manifest("req/a.txt")
        _write_travis(tmp_path, {"python": ["3.12.4", "3.11.9"], "requirements": ["req/a.txt"]})

        result = _rows(tmp_path, "--runtime", "3.12.4")

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "Matrix rows for Python 3.12.4" in result.output
        assert f"{Icons.SUCCESS} req/a.txt  Python 3.12.4" in result.output
        assert f"{Icons.SKIPPED} req/a.txt  Python 3.11.9" in result.output

    def test_reports_manifest_problems(self, tmp_path, make_manifest):
        """Test invalid manifests are listed, not fatal."""
        make_manifest("req/a.txt", content="pytest\n")
        _write_travis(
            tmp_path,
            {"python": ["3.12.4"], "requirements": ["req/a.txt", "req/missing.txt"]},
        )

        result = _rows(tmp_path, "--runtime", "3.12.4")

        assert result.exit_code == ExitCode.SUCCESS
        assert "Manifest is missing envmatrix dependency: req/a.txt" in result.output
        assert "Manifest not found: req/missing.txt" in result.output

    def test_binary_manifest_is_listed_as_problem(self, tmp_path):
        """Test undecodable manifest bytes do not abort the listing."""
        (tmp_path / "req").mkdir()
        (tmp_path / "req" / "a.txt").write_bytes(b"\xff\xfe")
        _write_travis(tmp_path, {"python": ["3.12.4"], "requirements": ["req/a.txt"]})

        result = _rows(tmp_path, "--runtime", "3.12.4")

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "Manifest is missing envmatrix dependency: req/a.txt" in result.output

    def test_unreadable_manifest_is_listed_as_problem(self, tmp_path, make_manifest):
        """Test a read failure is listed, not fatal."""
        make_manifest("req/a.txt")
        _write_travis(tmp_path, {"python": ["3.12.4"], "requirements": ["req/a.txt"]})

        with patch(
            "envmatrix.row.read_text",
            side_effect=FileOperationError("Permission denied"),
        ):
            result = _rows(tmp_path, "--runtime", "3.12.4")

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "Manifest could not be read: req/a.txt" in result.output

    def test_empty_matrix(self, tmp_path):
        """Test a definition without rows."""
        _write_travis(tmp_path, {"python": [], "requirements": []})

        result = _rows(tmp_path)

        assert result.exit_code == ExitCode.SUCCESS
        assert "The matrix defines no rows" in result.output

    def test_missing_definition(self, tmp_path):
        """Test a project without CI configuration."""
        result = _rows(tmp_path)

        assert result.exit_code == ExitCode.CONFIG_ERROR


@pytest.mark.integration
class TestRowsCommandAliases:
    """Test alias resolution in the listing."""

    def test_shows_resolved_alias(self, tmp_path, make_manifest):
        """Test an aliased version shows what it resolves to."""
        make_manifest("req/a.txt")
        _write_travis(tmp_path, {"python": ["3.12"], "requirements": ["req/a.txt"]})
        listing_command = [sys.executable, "-c", "print('3.12 => 3.12.4')"]
        (tmp_path / ".envmatrix.yaml").write_text(
            yaml.safe_dump({"aliases": {"command": listing_command}}),
            encoding="utf-8",
        )

        result = _rows(tmp_path, "--runtime", "3.12.4")

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert f"{Icons.SUCCESS} req/a.txt  Python 3.12 (-> 3.12.4)" in result.output
