"""Payoff line-chart data for one result record.

Series come from the payoff keys of the first round; later rounds are read
against that key set. ``check_roster_stability`` reports rounds that disagree.
"""

from __future__ import annotations

import logging
import numbers
import random
from pathlib import Path
from typing import Any, List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from gtsim_core.domain.models import ChartSeries, ChartSpec, SimulationResultRecord  # noqa: E402

logger = logging.getLogger(__name__)

DETAIL_TITLE = "仿真结果详情"


def derive_series_keys(record: SimulationResultRecord) -> List[Any]:
    if not record.results:
        return []
    return list(record.results[0].payoffs.keys())


def series_label(key: Any) -> str:
    return f"玩家{key}收益"


def _random_color() -> str:
    return f"#{random.randrange(0x1000000):06x}"


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    return float(value)


def check_roster_stability(record: SimulationResultRecord) -> List[str]:
    """Warnings for rounds whose payoff keys differ from the first round's."""
    if not record.results:
        return []
    expected = {str(k) for k in derive_series_keys(record)}
    warnings = []
    for index, rnd in enumerate(record.results[1:], start=1):
        seen = {str(k) for k in rnd.payoffs.keys()}
        if seen == expected:
            continue
        missing = sorted(expected - seen)
        added = sorted(seen - expected)
        warnings.append(f"round {index} (step {rnd.step}): missing players {missing}, extra players {added}")
    if warnings:
        logger.warning("Result %s has an unstable roster across %d rounds", record.id, len(warnings))
    return warnings


def build_chart(record: SimulationResultRecord) -> ChartSpec:
    series = []
    for key in derive_series_keys(record):
        series.append(
            ChartSeries(
                key=str(key),
                data_key=f"payoffs.{key}",
                label=series_label(key),
                color=_random_color(),
                values=[_as_number(rnd.payoff_for(key)) for rnd in record.results],
            )
        )
    return ChartSpec(
        title=f"{record.model.name} - {DETAIL_TITLE}",
        x_labels=[rnd.step for rnd in record.results],
        series=series,
        warnings=check_roster_stability(record),
    )


def render_chart(chart: ChartSpec, save_path: str | Path) -> Path:
    """Draw the payoff lines to an image file; x positions follow round order."""
    fig, ax = plt.subplots(figsize=(8, 4))
    try:
        x = np.arange(len(chart.x_labels))
        for s in chart.series:
            y = np.array([np.nan if v is None else v for v in s.values], dtype=float)
            ax.plot(x, y, label=s.label, color=s.color)
        ax.set_xticks(x)
        ax.set_xticklabels([str(label) for label in chart.x_labels])
        ax.set_title(chart.title)
        ax.grid(True, linestyle="--", alpha=0.5)
        if chart.series:
            ax.legend()
        path = Path(save_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=150, bbox_inches="tight")
        logger.info("Chart saved to %s", path)
        return path
    finally:
        plt.close(fig)
