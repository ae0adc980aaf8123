from __future__ import annotations

import io
import math
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from gtsim_core.domain.models import Player, SimulationResultRecord

ROUND_HEADER = "回合"
CHOICE_SUFFIX = "策略"
PAYOFF_SUFFIX = "收益"
BOM = "\ufeff"


def header_for(players: Sequence[Player]) -> List[str]:
    header = [ROUND_HEADER]
    for player in players:
        header.extend([f"{player.name}{CHOICE_SUFFIX}", f"{player.name}{PAYOFF_SUFFIX}"])
    return header


def format_cell(value: Any) -> str:
    """
    Render one value the way it should appear in a spreadsheet cell.
    Missing values become empty cells; numbers never carry grouping separators.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def display_step(step: Any) -> str:
    if step is None:
        return ""
    return str(int(step) + 1)


def encode_csv(record: SimulationResultRecord) -> str:
    """
    Project a result record onto one row per round:
    round number, then strategy and payoff for each roster player.
    """
    players = record.players
    rows = []
    for rnd in record.results:
        row = [display_step(rnd.step)]
        for player in players:
            row.append(format_cell(rnd.choice_for(player.id)))
            row.append(format_cell(rnd.payoff_for(player.id)))
        rows.append(row)
    df = pd.DataFrame(rows, columns=header_for(players), dtype=object)
    return df.to_csv(index=False, lineterminator="\n")


def csv_bytes(text: str) -> bytes:
    """UTF-8 with a byte-order mark so spreadsheet apps detect the encoding."""
    return (BOM + text).encode("utf-8")


def _parse_number(raw: str) -> Any:
    if raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


def parse_csv(text: str, players: Sequence[Player]) -> List[Dict[str, Any]]:
    """
    Read an exported CSV back into round dicts keyed by player id.
    Columns are taken by position, so duplicate player names are fine.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]
    df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    expected = 1 + 2 * len(players)
    if len(df.columns) != expected:
        raise ValueError(f"Expected {expected} columns, found {len(df.columns)}")

    rounds: List[Dict[str, Any]] = []
    for values in df.itertuples(index=False, name=None):
        step: Optional[int] = int(values[0]) - 1 if values[0] != "" else None
        choices: Dict[int, Any] = {}
        payoffs: Dict[int, Any] = {}
        for i, player in enumerate(players):
            choice = values[1 + 2 * i]
            choices[player.id] = choice if choice != "" else None
            payoffs[player.id] = _parse_number(values[2 + 2 * i])
        rounds.append({"step": step, "playerChoices": choices, "payoffs": payoffs})
    return rounds
