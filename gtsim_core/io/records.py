from __future__ import annotations

import datetime as dt
from typing import Any, Mapping

import pandas as pd

from gtsim_core.domain.models import GameModelRef, Player, Round, SimulationResultRecord
from gtsim_core.errors import RecordFormatError

REQUIRED_KEYS = {"id", "results", "created_at", "game_models"}


def parse_timestamp(value: Any) -> dt.datetime:
    """Parse a stored timestamp; naive values are taken as UTC."""
    if isinstance(value, dt.datetime):
        ts = value
    else:
        ts = pd.Timestamp(value).to_pydatetime()
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return ts


def _player_id(raw: Any) -> Any:
    """Integer ids where the store allows it, otherwise the id as stored."""
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw)
    return raw


def player_from_entry(entry: Any) -> Player:
    if not isinstance(entry, Mapping):
        return Player(id=entry, name="")
    name = entry.get("name")
    return Player(id=_player_id(entry.get("id")), name="" if name is None else str(name))


def model_from_row(data: Mapping[str, Any]) -> GameModelRef:
    config = data.get("config") or {}
    players = [player_from_entry(p) for p in config.get("players") or []]
    return GameModelRef(name=str(data.get("name", "")), type=str(data.get("type", "")), players=players)


def record_from_row(row: Mapping[str, Any]) -> SimulationResultRecord:
    missing = REQUIRED_KEYS - set(row.keys())
    if missing:
        raise RecordFormatError(f"Missing keys in result row: {sorted(missing)}", details=dict(row))
    model = row["game_models"]
    if not isinstance(model, Mapping):
        raise RecordFormatError("Result row has no joined game model", details=dict(row))
    try:
        return SimulationResultRecord(
            id=str(row["id"]),
            model_id=str(row.get("model_id", "")),
            results=[Round.from_dict(item) for item in row["results"] or []],
            created_at=parse_timestamp(row["created_at"]),
            model=model_from_row(model),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise RecordFormatError(f"Malformed result row {row.get('id')!r}: {exc}", details=dict(row)) from exc

