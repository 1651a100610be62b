"""Tests for the score_keyboard and compare_keyboards command-line tools."""

import logging
from pathlib import Path

import pandas as pd
import pytest
import yaml

import compare_keyboards
import score_keyboard
from keyboard_sim.cli_utils import (determine_output_mode, handle_common_errors,
                                    resolve_text_source, select_definition)
from conftest import custom_key_dict, keyboard_dict

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures root logging; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def ab_file(write_keyboard_file):
    return write_keyboard_file(keyboard_dict(
        [custom_key_dict(0, 0, "a"), custom_key_dict(1, 0, "b")], identifier="ab"))


@pytest.fixture
def missing_config(tmp_path):
    return str(tmp_path / "no_config.yaml")


class TestScoreKeyboard:
    def test_score_only(self, ab_file, missing_config, capsys):
        exit_code = score_keyboard.main(["--keyboard", ab_file, "--text", "ab",
                                         "--score-only", "--config", missing_config])
        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "90"

    def test_csv(self, ab_file, missing_config, capsys):
        exit_code = score_keyboard.main(["--keyboard", ab_file, "--text", "ab",
                                         "--csv", "--config", missing_config, "--quiet"])
        assert exit_code == 0
        lines = capsys.readouterr().out.strip().split("\n")
        assert lines[0].startswith("total,")
        assert lines[1].startswith("90,")

    def test_detailed(self, ab_file, missing_config, capsys):
        exit_code = score_keyboard.main(["--keyboard", ab_file, "--text", "abz",
                                         "--top-keys", "1", "--config", missing_config])
        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.startswith("ab (latin)")
        assert "Most used keys (top 1):" in out
        assert "z×1" in out

    def test_text_file_and_index(self, write_keyboard_file, missing_config, tmp_path, capsys):
        path = write_keyboard_file([
            keyboard_dict([custom_key_dict(0, 0, "a")], identifier="first"),
            keyboard_dict([custom_key_dict(0, 0, "か")], identifier="second", language="ja_JP"),
        ])
        text_path = tmp_path / "text.txt"
        text_path.write_text("カカ\n", encoding="utf-8")
        exit_code = score_keyboard.main(["--keyboard", path, "--index", "1", "--text-file", str(text_path),
                                         "--detailed", "--config", missing_config])
        assert exit_code == 0
        assert capsys.readouterr().out.startswith("second (kana)")

    def test_repository_config(self, ab_file, capsys):
        exit_code = score_keyboard.main(["--keyboard", ab_file, "--text", "ab", "--score-only",
                                         "--config", str(REPO_CONFIG)])
        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "90"

    def test_missing_keyboard_file(self, tmp_path, missing_config, capsys):
        exit_code = score_keyboard.main(["--keyboard", str(tmp_path / "none.json"),
                                         "--config", missing_config])
        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_index_out_of_range(self, ab_file, missing_config, capsys):
        exit_code = score_keyboard.main(["--keyboard", ab_file, "--index", "3", "--config", missing_config])
        assert exit_code == 1
        assert "out of range" in capsys.readouterr().err

    def test_invalid_definition(self, write_keyboard_file, missing_config, capsys):
        path = write_keyboard_file({"identifier": "broken"})
        assert score_keyboard.main(["--keyboard", path, "--config", missing_config]) == 1

    def test_non_positive_reference_distance(self, ab_file, tmp_path, capsys):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({"ergonomics_scorer": {"reference_distance": 0}}),
                               encoding="utf-8")
        exit_code = score_keyboard.main(["--keyboard", ab_file, "--text", "ab", "--score-only",
                                         "--config", str(config_path), "--quiet"])
        assert exit_code == 1
        assert "Error: reference_distance must be positive" in capsys.readouterr().err

    def test_text_options_exclusive(self, ab_file):
        with pytest.raises(SystemExit):
            score_keyboard.main(["--keyboard", ab_file, "--text", "a", "--text-file", "t.txt"])


class TestCompareKeyboards:
    def test_ranked_table_and_csv(self, write_keyboard_file, missing_config, tmp_path, capsys):
        ab_path = write_keyboard_file(keyboard_dict(
            [custom_key_dict(0, 0, "a"), custom_key_dict(1, 0, "b")], identifier="ab"), "ab.json")
        sparse_path = write_keyboard_file(keyboard_dict(
            [custom_key_dict(0, 0, "a")], identifier="sparse"), "sparse.json")
        csv_path = tmp_path / "out" / "ranking.csv"

        exit_code = compare_keyboards.main(["--keyboards", sparse_path, ab_path, "--mode", "latin",
                                            "--text", "abab", "--csv-output", str(csv_path),
                                            "--config", missing_config])
        assert exit_code == 0
        assert "Keyboard comparison (2 keyboards)" in capsys.readouterr().out

        table = pd.read_csv(csv_path)
        assert list(table["keyboard"]) == ["ab", "sparse"]
        assert list(table["position"]) == [1, 2]

    def test_plot(self, ab_file, missing_config, tmp_path):
        plot_path = tmp_path / "ranking.png"
        exit_code = compare_keyboards.main(["--keyboards", ab_file, "--text", "ab",
                                            "--plot", str(plot_path), "--config", missing_config])
        assert exit_code == 0
        assert plot_path.exists()

    def test_missing_file(self, tmp_path, missing_config):
        assert compare_keyboards.main(["--keyboards", str(tmp_path / "none.json"),
                                       "--config", missing_config]) == 1


class TestCliHelpers:
    def test_determine_output_mode(self):
        import argparse
        assert determine_output_mode(argparse.Namespace(csv=True, output_format="detailed")) == "csv"
        assert determine_output_mode(argparse.Namespace(output_format="score_only")) == "score_only"
        assert determine_output_mode(argparse.Namespace()) == "detailed"

    def test_select_definition_empty(self):
        with pytest.raises(ValueError):
            select_definition([], 0)

    def test_handle_common_errors(self):
        @handle_common_errors
        def interrupted():
            raise KeyboardInterrupt

        @handle_common_errors
        def failing():
            raise ValueError("bad")

        assert interrupted() == 130
        assert failing() == 1

    def test_resolve_text_source(self):
        import argparse
        config = {'default_text_file': 'corpus.txt'}
        assert resolve_text_source(argparse.Namespace(text=None, text_file=None), config) == 'corpus.txt'
        assert resolve_text_source(argparse.Namespace(text="ab", text_file=None), config) is None
        assert resolve_text_source(argparse.Namespace(text=None, text_file="t.txt"), config) == "t.txt"
        assert resolve_text_source(argparse.Namespace(text=None, text_file=None), {}) is None
