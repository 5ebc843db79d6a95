"""Tests for path validation checker."""

import subprocess
import sys
from pathlib import Path

from wage_finder.io.check_paths import check_paths

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_config(tmp_path, source_dir, output_dir) -> Path:
    config = tmp_path / "paths_test.yaml"
    config.write_text(f"source_dir: {source_dir}\noutput_dir: {output_dir}\n")
    return config


def test_check_paths_creates_output_dir(make_archive, tmp_path, capsys):
    src = make_archive("OFLC_Wages_2025-26.zip")
    out = tmp_path / "public" / "data"
    assert check_paths(_write_config(tmp_path, src.parent, out)) == 0
    assert out.is_dir()
    stdout = capsys.readouterr().out
    assert "Found 1 archive(s)" in stdout
    assert "PATH VALIDATION COMPLETE" in stdout


def test_check_paths_missing_source_dir(tmp_path, capsys):
    assert check_paths(_write_config(tmp_path, tmp_path / "missing", tmp_path / "out")) == 1
    assert "source_dir is not an existing directory" in capsys.readouterr().out


def test_check_paths_output_is_a_file(tmp_path):
    blocker = tmp_path / "out"
    blocker.write_text("")
    assert check_paths(_write_config(tmp_path, tmp_path, blocker)) == 1


def test_check_paths_cli(tmp_path):
    config = _write_config(tmp_path, tmp_path, tmp_path / "out")
    result = subprocess.run(
        [sys.executable, "-m", "wage_finder.io.check_paths", "--paths", str(config)],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
    )
    assert result.returncode == 0, f"STDOUT:\n{result.stdout}\nSTDERR:\n{result.stderr}"
    assert "✓ OK" in result.stdout
