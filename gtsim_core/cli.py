from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gtsim_core.domain.models import Notification, SimulationResultRecord
from gtsim_core.io import config as config_io
from gtsim_core.io.store import JsonFileStore
from gtsim_core.services import charting, exporter
from gtsim_core.services.csv_export import display_step, format_cell, header_for
from gtsim_core.services.repository import ResultRepository, ResultsView

app = typer.Typer(help="Admin CLI for game-theory simulation results.")
console = Console()

_state = {"config": config_io.AppConfig(), "store": None}


@app.callback()
def main(
    store: Optional[Path] = typer.Option(None, help="JSON row store (default: GTSIM_STORE_PATH)"),
    config: Optional[Path] = typer.Option(None, help="JSON config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = config_io.load_app_config(config)
    _state["config"] = cfg
    _state["store"] = store or Path(cfg.store_path)


def _view() -> ResultsView:
    cfg = _state["config"]
    repo = ResultRepository(JsonFileStore(_state["store"]), toast_ms=cfg.toast_ms)
    view = ResultsView(repo)
    outcome = view.load()
    if not outcome.ok:
        _notify(outcome.notification)
    return view


def _notify(notification: Optional[Notification]) -> None:
    if notification is None:
        return
    color = {"error": "red", "success": "green"}.get(notification.type, "yellow")
    console.print(f"[{color}]{notification.message}[/{color}]")


def _require(view: ResultsView, result_id: str) -> SimulationResultRecord:
    record = view.select(result_id)
    if record is None:
        console.print(f"[red]No result with id {result_id}[/red]")
        raise typer.Exit(code=1)
    return record


@app.command("list")
def list_results():
    """List simulation results, newest first."""
    view = _view()
    table = Table(title="仿真结果管理")
    table.add_column("ID")
    table.add_column("模型")
    table.add_column("类型")
    table.add_column("仿真时间")
    table.add_column("回合", justify="right")
    for record in view.records:
        table.add_row(
            record.id,
            record.model.name,
            record.model.type,
            record.created_at.isoformat(sep=" ", timespec="minutes"),
            str(len(record.results)),
        )
    console.print(table)


@app.command()
def show(
    result_id: str = typer.Argument(..., help="Result id"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw rounds as JSON"),
):
    """Show the per-round table of one result."""
    view = _view()
    record = _require(view, result_id)
    if as_json:
        typer.echo(json.dumps(record.raw_results(), indent=2, ensure_ascii=False))
        return

    chart = charting.build_chart(record)
    table = Table(title=chart.title)
    for column in header_for(record.players):
        table.add_column(column)
    for rnd in record.results:
        cells = [display_step(rnd.step)]
        for player in record.players:
            cells.extend([format_cell(rnd.choice_for(player.id)), format_cell(rnd.payoff_for(player.id))])
        table.add_row(*cells)
    console.print(table)
    for warning in chart.warnings:
        console.print(f"[yellow]Roster changed: {warning}[/yellow]")


@app.command()
def export(
    result_id: str = typer.Argument(..., help="Result id"),
    out_dir: Optional[Path] = typer.Option(None, help="Directory for the CSV and JSON files"),
):
    """Export one result as CSV and JSON."""
    cfg = _state["config"]
    view = _view()
    record = _require(view, result_id)
    outcome = exporter.export_record(record, out_dir or Path(cfg.export_dir), tz=cfg.timezone, toast_ms=cfg.toast_ms)
    _notify(outcome.notification)
    for path in outcome.value or []:
        typer.echo(str(path))
    if not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def delete(
    result_id: str = typer.Argument(..., help="Result id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete one result after confirmation."""
    view = _view()
    outcome = view.delete(result_id, confirm=lambda prompt: yes or typer.confirm(prompt, default=False))
    _notify(outcome.notification)
    if outcome.notification is not None and not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def chart(
    result_id: str = typer.Argument(..., help="Result id"),
    out: Path = typer.Option(..., help="Output image path (e.g. payoffs.png)"),
):
    """Render the payoff chart of one result."""
    view = _view()
    record = _require(view, result_id)
    chart_spec = charting.build_chart(record)
    charting.render_chart(chart_spec, out)
    for warning in chart_spec.warnings:
        console.print(f"[yellow]Roster changed: {warning}[/yellow]")
    typer.echo(f"Chart written to {out}")


if __name__ == "__main__":
    app()
