import sys

import pytest

from flexbar import cli
from flexbar.color import SHOW_CURSOR


def test_infinite_scenario(monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv", ["flexbar-demo", "infinite", "--limit", "0.1", "--seed", "1", "--no-color"]
    )
    cli.main()
    out = capsys.readouterr().out
    assert out.endswith(SHOW_CURSOR + "\n")
    assert "Infinite" in out
    assert "\x1b[36m" not in out


def test_unknown_scenario(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["flexbar-demo", "bogus"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 1
    assert "Unknown scenario: bogus" in capsys.readouterr().err


def test_invalid_tick(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["flexbar-demo", "infinite", "--tick", "0"])
    with pytest.raises(SystemExit):
        cli.main()
    assert "tick_interval" in capsys.readouterr().err
