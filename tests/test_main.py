import json

import blockfall.session as session_module
from blockfall.__main__ import main, simulate
from blockfall.board import COLUMNS, ROWS, Board
from blockfall.game_state import GameState
from blockfall.high_score import MemoryHighScoreStore
from blockfall.shapes import PieceKind
from blockfall.tetromino import Tetromino


def test_simulate_is_reproducible():
    a = simulate(300, MemoryHighScoreStore(), seed=11)
    b = simulate(300, MemoryHighScoreStore(), seed=11)
    assert a.state == b.state
    assert a.tick_count == 300


def test_main_prints_final_frame(capsys):
    main(["--ticks", "40", "--seed", "3", "--no-persist", "--log-level", "WARNING"])
    out = capsys.readouterr().out.splitlines()
    assert len(out) == ROWS + 1
    assert all(set(line) <= {"#", "."} for line in out[:ROWS])
    assert out[-1].startswith("Lines: 0")


def _doomed_game(high_score=0, rng=None):
    # The spawn row is blocked, so the first tick ends the game on score 3.
    return GameState(
        board=Board().with_cells([(2, 4), (2, 5)], PieceKind.T),
        current=Tetromino(PieceKind.O, x=4, y=0),
        preview=Tetromino(PieceKind.I, x=COLUMNS // 2, y=0),
        score=3,
        high_score=high_score,
    )


def test_main_persists_high_score_to_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(session_module, "new_game", _doomed_game)
    path = tmp_path / "score.json"
    path.write_text(json.dumps({"high_score": 0}))

    main(["--ticks", "1", "--seed", "7", "--high-score-file", str(path), "--log-level", "WARNING"])

    summary = capsys.readouterr().out.splitlines()[-1]
    assert summary == "Lines: 3  High score: 3  Ended: True"
    assert json.loads(path.read_text())["high_score"] == 3


def test_main_keeps_better_stored_high_score(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(session_module, "new_game", _doomed_game)
    path = tmp_path / "score.json"
    path.write_text(json.dumps({"high_score": 8}))

    main(["--ticks", "1", "--high-score-file", str(path), "--log-level", "WARNING"])

    assert capsys.readouterr().out.splitlines()[-1].endswith("High score: 8  Ended: True")
    assert json.loads(path.read_text())["high_score"] == 8
