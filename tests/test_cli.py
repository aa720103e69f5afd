import io
import sys

import pytest

import run_filler

GAME = """\
$$$ exec p1 : [solution/filler]
Anfield 5 3:
    01234
000 .....
001 .@...
002 ....$
Piece 2 1:
**
"""


def test_default_policy(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(GAME))
    run_filler.main([])
    assert capsys.readouterr().out == "1 0\n"


def test_aggressive_policy(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(GAME))
    run_filler.main(["--policy", "aggressive"])
    assert capsys.readouterr().out == "1 1\n"


def test_unknown_policy_is_rejected():
    with pytest.raises(SystemExit):
        run_filler.main(["--policy", "random"])


def test_time_budget_flag(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(GAME))
    run_filler.main(["--time-budget", "0"])
    assert capsys.readouterr().out == "1 0\n"
    assert run_filler.build_parser().parse_args([]).time_budget == 2.0
