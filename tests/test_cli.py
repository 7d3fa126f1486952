from __future__ import annotations

import json

from dlgvn.cli import main


def test_headless_plays_script(capsys):
    rc = main(["run", "--headless", "--name", "Rita", "--dia", json.dumps(["Hello there", "Bye"])])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Rita: Hello there", "Rita: Bye"]


def test_headless_cycles_with_line_count(capsys):
    rc = main(["--headless", "--dia", '["A", "B"]', "--lines", "3"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["Rita: A", "Rita: B", "Rita: A"]


def test_headless_bad_script_uses_default(capsys):
    rc = main(["--headless", "--dia", "not json", "--lines", "1"])
    assert rc == 0
    assert capsys.readouterr().out.startswith("Rita: Guys, guys, so um yesterday")


def test_missing_config_file(tmp_path, capsys):
    rc = main(["run", "--headless", "--config", str(tmp_path / "missing.json")])
    assert rc == 2
    assert "Config not found" in capsys.readouterr().out
