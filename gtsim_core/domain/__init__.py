from gtsim_core.domain.models import (  # noqa: F401
    ChartSeries,
    ChartSpec,
    ExportArtifact,
    ExportBundle,
    GameModelRef,
    Notification,
    Outcome,
    Player,
    Round,
    SimulationResultRecord,
)

__all__ = [
    "ChartSeries",
    "ChartSpec",
    "ExportArtifact",
    "ExportBundle",
    "GameModelRef",
    "Notification",
    "Outcome",
    "Player",
    "Round",
    "SimulationResultRecord",
]
