import io
import json
import sys
import pathlib

sys.path.append(str(pathlib.Path(__file__).resolve().parent.parent))

import pytest

from scripts import build_tree


def test_prints_rendered_tree_from_file(tmp_path, capsys):
    source = tmp_path / "lists.txt"
    source.write_text("2 1\n7 5 6\nstop\n9 9 9\n")
    assert build_tree.main([str(source)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "Level 1: 1 2 ",
        " Left children:",
        "   No child.",
        " Right children:",
        "  Level 2: 5 6 7 ",
        "   Left children:",
        "     No child.",
        "   Right children:",
        "     No child.",
    ]


def test_json_output_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("1 2 3\n3 2 1\nstop\n"))
    assert build_tree.main(["--json"]) == 0
    entries = json.loads(capsys.readouterr().out)
    assert entries[0] == {"depth": 1, "values": [1, 2, 3]}
    assert entries[1] == {"depth": 2, "values": None}
    assert entries[2] == {"depth": 2, "values": [1, 2, 3]}


def test_custom_stop_token_and_indent(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("8\nquit\n1\n"))
    assert build_tree.main(["--stop", "quit", "--indent", "4"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Level 1: 8 "
    assert out[2] == "     No child."
    assert len(out) == 5


def test_stop_before_any_list(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("stop\n"))
    assert build_tree.main([]) == 1
    assert "Stopping..." in capsys.readouterr().err


def test_invalid_input_exits_with_usage_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("1 2\n3 four\n"))
    with pytest.raises(SystemExit) as exc:
        build_tree.main([])
    assert exc.value.code == 2
    assert "line 2" in capsys.readouterr().err


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        build_tree.main([str(tmp_path / "missing.txt")])
    assert exc.value.code == 2


class TTYInput(io.StringIO):
    def isatty(self):
        return True


def test_prompts_on_terminal(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", TTYInput("1 2\n\n5 6 7\nstop\n9\n"))
    assert build_tree.main([]) == 0
    captured = capsys.readouterr()
    again = build_tree.AGAIN.format(stop="stop")
    assert captured.err.startswith(build_tree.INTRO.format(stop="stop"))
    assert captured.err.count(again) == 2
    assert captured.err.endswith(again)
    assert captured.out.splitlines()[0] == "Level 1: 1 2 "
    assert "Level 2: 5 6 7 " in captured.out


def test_stop_option_is_stripped(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("3\nquit\n4\n"))
    assert build_tree.main(["--stop", " quit"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Level 1: 3 "
    assert len(out) == 5
