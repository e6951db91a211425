import json

from barlatro.demo import main


def test_demo_runs(capsys):
    assert main(["--seed", "3", "--rounds", "1"]) == 0

    out = capsys.readouterr().out
    assert "HAND EVALUATION DEMO" in out
    assert "Full House" in out
    assert "Round 1 - Beginner" in out


def test_demo_saves_history(tmp_path, capsys):
    path = tmp_path / "history.json"
    assert main(["--seed", "5", "--rounds", "2", "--preset", "relaxed", "--history", str(path)]) == 0

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["metadata"]["preset"] == "relaxed"
    assert data["summary"]["hands_played"] >= 1
    assert "History saved" in capsys.readouterr().out
