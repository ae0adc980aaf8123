"""Shared fixtures: a two-player prisoner's dilemma roster and a JSON row store."""

import datetime as dt
import json
from pathlib import Path

import pytest

from gtsim_core.domain.models import GameModelRef, Player, Round, SimulationResultRecord

PLAYERS = [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]


def make_record(rounds, players=PLAYERS, name="囚徒困境", created_at=None, result_id="r1"):
    return SimulationResultRecord(
        id=result_id,
        model_id="m1",
        results=[Round.from_dict(r) for r in rounds],
        created_at=created_at or dt.datetime(2024, 3, 5, 9, 7, tzinfo=dt.timezone.utc),
        model=GameModelRef(name=name, type="prisoners_dilemma", players=[Player(**p) for p in players]),
    )


@pytest.fixture
def rounds():
    return [
        {"step": 0, "playerChoices": {"1": "C", "2": "D"}, "payoffs": {"1": 3, "2": 1}},
        {"step": 1, "playerChoices": {"1": "D", "2": "D"}, "payoffs": {"1": 1, "2": 1}},
        {"step": 2, "playerChoices": {"1": "C", "2": "C"}, "payoffs": {"1": 2.5, "2": 2.5}},
    ]


@pytest.fixture
def record(rounds):
    return make_record(rounds)


@pytest.fixture
def store_path(tmp_path: Path, rounds) -> Path:
    payload = {
        "game_models": [
            {"id": "m1", "name": "囚徒困境", "type": "prisoners_dilemma", "config": {"players": PLAYERS}},
            {"id": "m2", "name": "Stag Hunt", "type": "coordination", "config": {"players": PLAYERS}},
        ],
        "simulation_results": [
            {"id": "r1", "model_id": "m1", "results": rounds, "created_at": "2024-03-05T09:07:00Z"},
            {"id": "r2", "model_id": "m2", "results": rounds[:1], "created_at": "2024-04-01T12:00:00Z"},
        ],
    }
    path = tmp_path / "store.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path
