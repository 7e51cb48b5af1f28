"""Tests for the command-line entry point."""

import json

import pytest

from main import main

WIKI_PUZZLE = (
    "530070000600195000098000060"
    "800060003400803001700020006"
    "060000280000419005000080079"
)


class TestCheck:
    """Tests for the check command."""

    def test_unique_puzzle(self, capsys):
        """A well-posed puzzle is reported unique with exit code 0."""
        code = main(["--log-level", "ERROR", "check", WIKI_PUZZLE])
        out = capsys.readouterr().out
        assert code == 0
        assert "Unique solution: yes" in out
        assert "534678912" in out

    def test_puzzle_from_file(self, tmp_path, capsys):
        """Puzzles can be read from a file."""
        path = tmp_path / "puzzle.txt"
        path.write_text("\n".join(WIKI_PUZZLE[i:i + 9] for i in range(0, 81, 9)))
        assert main(["--log-level", "ERROR", "check", str(path)]) == 0
        assert "Logic coverage:" in capsys.readouterr().out

    def test_ambiguous_puzzle(self, capsys):
        """A puzzle with several solutions exits with code 1."""
        code = main(["--log-level", "ERROR", "check", "0" * 81])
        assert code == 1
        assert "Unique solution: no" in capsys.readouterr().out

    def test_bad_input(self, capsys):
        """Malformed puzzles exit with code 2."""
        assert main(["--log-level", "ERROR", "check", "123"]) == 2
        assert "Error" in capsys.readouterr().err


class TestGenerate:
    """Tests for the sudoku and killer commands."""

    def test_sudoku_to_stdout(self, capsys):
        """One puzzle is printed with a header line."""
        code = main(["--log-level", "ERROR", "sudoku", "--difficulty", "easy", "--seed", "1"])
        lines = capsys.readouterr().out.splitlines()
        assert code == 0
        assert lines[0].startswith("# easy")
        assert all(len(line) == 9 for line in lines[1:10])

    def test_sudoku_to_file(self, tmp_path):
        """Several puzzles are written as JSON lines."""
        path = tmp_path / "out" / "puzzles.jsonl"
        code = main([
            "--log-level", "ERROR",
            "sudoku", "--difficulty", "medium", "--count", "2",
            "--no-ensure-difficulty", "--seed", "3", "--output", str(path),
        ])
        assert code == 0
        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert len(records) == 2
        assert all(r["difficulty"] == "medium" for r in records)

    def test_killer_to_file(self, tmp_path):
        """A killer puzzle is written as JSON."""
        path = tmp_path / "killer.json"
        code = main([
            "--log-level", "ERROR",
            "killer", "--seed", "4", "--max-cage", "3", "--output", str(path),
        ])
        data = json.loads(path.read_text())
        assert code == 0
        assert data["size"] == 9
        assert sum(len(c["cells"]) for c in data["cages"]) == 81
        assert max(len(c["cells"]) for c in data["cages"]) <= 3

    def test_killer_to_stdout(self, capsys):
        """The cage map and cage list are printed."""
        assert main(["--log-level", "ERROR", "killer", "--seed", "5"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# 9x9 killer")
        assert "cage 1: sum" in out


class TestOptions:
    """Tests for global options."""

    def test_unknown_log_level_is_rejected(self, capsys):
        """An unknown --log-level is a usage error, not a traceback."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--log-level", "LOUD", "check", WIKI_PUZZLE])
        assert excinfo.value.code == 2
        assert "--log-level" in capsys.readouterr().err

    def test_log_level_is_case_insensitive(self, capsys):
        """Level names are accepted in any case."""
        assert main(["--log-level", "error", "check", WIKI_PUZZLE]) == 0

    def test_unknown_level_in_config(self, tmp_path, capsys):
        """A bad level from the config file exits with code 2."""
        path = tmp_path / "engine.yaml"
        path.write_text("logging:\n  level: LOUD\n")
        code = main(["--config", str(path), "check", WIKI_PUZZLE])
        assert code == 2
        assert "Unknown log level" in capsys.readouterr().err
