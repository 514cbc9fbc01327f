import pytest

from pypipex.cli import USAGE, main, main_bonus

TEXT = "alpha\nbeta\n"


@pytest.fixture
def infile(tmp_path):
    path = tmp_path / "in.txt"
    path.write_text(TEXT)
    return path


@pytest.mark.parametrize("entry", [main, main_bonus])
def test_too_few_arguments(entry, capsys):
    assert entry(["in", "cat", "out"]) == 1
    assert capsys.readouterr().out == USAGE + "\n"


def test_main_rejects_extra_commands(tmp_path, infile, capsys):
    out = tmp_path / "out.txt"
    assert main([str(infile), "cat", "cat", "cat", str(out)]) == 1
    assert capsys.readouterr().out == USAGE + "\n"
    assert not out.exists()


def test_main_runs_two_commands(tmp_path, infile):
    out = tmp_path / "out.txt"
    assert main([str(infile), "cat", "tr a-z A-Z", str(out)]) == 0
    assert out.read_text() == TEXT.upper()


def test_main_bonus_runs_many_commands(tmp_path, infile):
    out = tmp_path / "out.txt"
    args = [str(infile), "cat", "cat", "cat", "tr a-z A-Z", str(out)]
    assert main_bonus(args) == 0
    assert out.read_text() == TEXT.upper()


def test_main_succeeds_even_when_command_missing(tmp_path, infile, capsys):
    out = tmp_path / "out.txt"
    assert main([str(infile), "cat", "nosuchcmd_pypipex", str(out)]) == 0
    assert "pipex: No such file or directory" in capsys.readouterr().out
    assert out.read_text() == ""