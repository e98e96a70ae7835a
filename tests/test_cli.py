import io

import pytest

from latex_math_convert import __version__
from latex_math_convert.workflows.cli import main


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == __version__


def test_help_when_no_input(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert "latex-math-convert" in out
    assert "Rewrites:" in out


def test_prints_converted_file_by_default(tmp_path, capsys):
    path = tmp_path / "a.md"
    path.write_text("Use \\(x^2\\) here.\n", encoding="utf-8")

    assert main([str(path)]) == 0

    captured = capsys.readouterr()
    assert captured.out == "Use $x^2$ here.\n"
    assert "converted:" in captured.err
    assert path.read_text(encoding="utf-8") == "Use \\(x^2\\) here.\n"


def test_write_flag_updates_in_place(tmp_path, capsys):
    path = tmp_path / "a.md"
    path.write_text("\\[ a \\]", encoding="utf-8")

    assert main(["--write", str(tmp_path)]) == 0

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "updated:" in captured.err
    assert path.read_text(encoding="utf-8") == "$$a$$"


def test_stdout_flag_overrides_write(tmp_path, capsys):
    path = tmp_path / "a.md"
    path.write_text("\\(a\\)", encoding="utf-8")

    assert main(["--write", "--stdout", str(path)]) == 0

    assert capsys.readouterr().out == "$a$"
    assert path.read_text(encoding="utf-8") == "\\(a\\)"


def test_quiet_suppresses_info_logs(tmp_path, capsys):
    path = tmp_path / "a.md"
    path.write_text("\\(a\\)", encoding="utf-8")

    assert main(["-q", "--write", str(path)]) == 0

    assert capsys.readouterr().err == ""


def test_stdin_mode(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("```\n\\(x\\)\n```\n\\(y\\)\n"))

    assert main(["--stdin"]) == 0

    assert capsys.readouterr().out == "```\n\\(x\\)\n```\n$y$\n"


def test_missing_path_exits_non_zero(tmp_path, capsys):
    good = tmp_path / "good.md"
    good.write_text("\\(g\\)", encoding="utf-8")

    assert main(["--write", str(tmp_path / "missing.md"), str(good)]) == 1

    assert "not_found" in capsys.readouterr().err
    assert good.read_text(encoding="utf-8") == "$g$"


def test_invalid_environment_exits_non_zero(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("LATEX_MATH_CONVERT_LOG_LEVEL", "loud")

    assert main([str(tmp_path)]) == 1

    assert "Invalid configuration" in capsys.readouterr().err
