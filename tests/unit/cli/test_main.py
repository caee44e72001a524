"""
Tests for the pygrep command-line interface.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pygrep.cli import cli

pytestmark = pytest.mark.cli


class TestCLI:
    def setup_method(self):
        self.runner = CliRunner()

    def create_tree(self, tmp_path: Path) -> Path:
        root = tmp_path / "tree"
        (root / "sub").mkdir(parents=True)
        (root / "a.txt").write_text("Rust:\nsafe, fast, productive.\nPick three.\n")
        (root / "sub" / "b.txt").write_text("Trust me.\nnothing fast here\n")
        (root / "none.txt").write_text("nothing to see\n")
        return root

    def test_directory_search(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "-n", "fast", str(root)])
        assert result.exit_code == 0, result.output
        assert f"In file: {root / 'a.txt'}" in result.output
        assert f"In file: {root / 'sub' / 'b.txt'}" in result.output
        assert "2:safe, fast, productive." in result.output
        assert "2:nothing fast here" in result.output
        assert "none.txt" not in result.output

    def test_single_file_prints_lines_only(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "-i", "rust", str(root / "a.txt")])
        assert result.exit_code == 0
        assert result.output == "Rust:\n"

    def test_invert_and_whole_word(self, tmp_path: Path):
        p = tmp_path / "w.txt"
        p.write_text("rust is great\nrusty old car\nPython programming\n")
        result = self.runner.invoke(cli, ["find", "-v", "-w", "-F", "rust", str(p)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["rusty old car", "Python programming"]

    def test_invalid_regex_exits_non_zero(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "(unclosed", str(root)])
        assert result.exit_code == 1
        assert "Application error" in result.output

    def test_fixed_strings_accepts_regex_metacharacters(self, tmp_path: Path):
        p = tmp_path / "m.txt"
        p.write_text("call (unclosed here\n")
        result = self.runner.invoke(cli, ["find", "-F", "(unclosed", str(p)])
        assert result.exit_code == 0
        assert "call (unclosed here" in result.output

    def test_missing_path_exits_non_zero(self, tmp_path: Path):
        result = self.runner.invoke(cli, ["find", "x", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Application error" in result.output

    def test_unlistable_root_exits_non_zero(self, tmp_path: Path, deny_listing):
        root = self.create_tree(tmp_path)
        deny_listing(root)
        result = self.runner.invoke(cli, ["find", "fast", str(root)])
        assert result.exit_code == 1
        assert "Application error" in result.output

    def test_no_matches_is_success(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "zzz", str(root)])
        assert result.exit_code == 0
        assert result.output == ""

    def test_json_output(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "--format", "json", "fast", str(root)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert {Path(f["path"]).name for f in data["files"]} == {"a.txt", "b.txt"}
        assert data["stats"]["files_matched"] == 2

    def test_stats(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "--stats", "fast", str(root)])
        assert result.exit_code == 0
        assert "files_scanned=3 files_matched=2" in result.output

    def test_max_filesize(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "--max-filesize", "5", "fast", str(root)])
        assert result.exit_code == 0
        assert result.output == ""

    def test_exclude(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        result = self.runner.invoke(cli, ["find", "--exclude", "sub/", "fast", str(root)])
        assert result.exit_code == 0
        assert "a.txt" in result.output
        assert "b.txt" not in result.output

    def test_show_errors(self, tmp_path: Path):
        root = self.create_tree(tmp_path)
        (root / "bad.txt").write_bytes(b"fast \xff\n")
        result = self.runner.invoke(cli, ["find", "--show-errors", "fast", str(root)])
        assert result.exit_code == 0
        assert "Search Error Report" in result.output
        assert "bad.txt" in result.output

    def test_missing_query_is_usage_error(self):
        result = self.runner.invoke(cli, ["find"])
        assert result.exit_code == 2

    def test_too_many_arguments(self, tmp_path: Path):
        result = self.runner.invoke(cli, ["find", "q", str(tmp_path), "extra"])
        assert result.exit_code == 2

    def test_unknown_flag(self, tmp_path: Path):
        result = self.runner.invoke(cli, ["find", "q", str(tmp_path), "--unknown"])
        assert result.exit_code == 2

    def test_default_path_is_current_directory(self, tmp_path: Path):
        with self.runner.isolated_filesystem(temp_dir=tmp_path):
            Path("here.txt").write_text("needle\n")
            result = self.runner.invoke(cli, ["find", "needle"])
        assert result.exit_code == 0
        assert "here.txt" in result.output
        assert "needle" in result.output
