from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar, Union

PlayerId = Union[int, str]
T = TypeVar("T")

ROUND_FIELDS = ("step", "playerChoices", "payoffs")


def lookup_player(mapping: Mapping[Any, Any], player_id: PlayerId) -> Any:
    """Fetch a per-player value whether the store keyed it by int or by str."""
    try:
        if player_id in mapping:
            return mapping[player_id]
    except TypeError:
        return None
    alt = str(player_id)
    if alt in mapping:
        return mapping[alt]
    try:
        return mapping.get(int(player_id))
    except (TypeError, ValueError):
        return None


@dataclasses.dataclass(frozen=True)
class Player:
    id: PlayerId
    name: str


@dataclasses.dataclass
class Round:
    step: int
    player_choices: Dict[Any, Any]
    payoffs: Dict[Any, Any]
    extra: Dict[str, Any] = dataclasses.field(default_factory=dict)
    # stored mapping, key order included; exported as-is when present
    raw: Optional[Dict[str, Any]] = dataclasses.field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Round":
        extra = {k: v for k, v in data.items() if k not in ROUND_FIELDS}
        return cls(
            step=data.get("step"),
            player_choices=dict(data.get("playerChoices") or {}),
            payoffs=dict(data.get("payoffs") or {}),
            extra=extra,
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.raw is not None:
            return self.raw
        return {
            "step": self.step,
            "playerChoices": self.player_choices,
            "payoffs": self.payoffs,
            **self.extra,
        }

    def choice_for(self, player_id: PlayerId) -> Any:
        return lookup_player(self.player_choices, player_id)

    def payoff_for(self, player_id: PlayerId) -> Any:
        return lookup_player(self.payoffs, player_id)


@dataclasses.dataclass(frozen=True)
class GameModelRef:
    name: str
    type: str
    players: List[Player]


@dataclasses.dataclass
class SimulationResultRecord:
    id: str
    model_id: str
    results: List[Round]
    created_at: dt.datetime
    model: GameModelRef

    @property
    def players(self) -> List[Player]:
        return self.model.players

    def raw_results(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.results]


@dataclasses.dataclass(frozen=True)
class Notification:
    type: str  # "error", "success" or "warning"
    message: str
    duration: Optional[int] = 3000  # milliseconds; None never expires

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "duration": self.duration}


@dataclasses.dataclass
class Outcome(Generic[T]):
    ok: bool
    value: Optional[T] = None
    notification: Optional[Notification] = None

    @classmethod
    def success(cls, value: Optional[T] = None, notification: Optional[Notification] = None) -> "Outcome[T]":
        return cls(ok=True, value=value, notification=notification)

    @classmethod
    def failure(cls, notification: Notification, value: Optional[T] = None) -> "Outcome[T]":
        return cls(ok=False, value=value, notification=notification)


@dataclasses.dataclass
class ExportArtifact:
    filename: str
    content: bytes
    media_type: str


@dataclasses.dataclass
class ExportBundle:
    basename: str
    csv: ExportArtifact
    json: ExportArtifact

    @property
    def artifacts(self) -> List[ExportArtifact]:
        return [self.csv, self.json]


@dataclasses.dataclass
class ChartSeries:
    key: str
    data_key: str
    label: str
    color: str
    values: List[Optional[float]]


@dataclasses.dataclass
class ChartSpec:
    title: str
    x_labels: List[Any]
    series: List[ChartSeries]
    warnings: List[str] = dataclasses.field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
