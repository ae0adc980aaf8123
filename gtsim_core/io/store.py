from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Protocol

from gtsim_core.errors import StoreError
from gtsim_core.io.records import parse_timestamp

logger = logging.getLogger(__name__)

RESULTS_TABLE = "simulation_results"
MODELS_TABLE = "game_models"


class ResultStore(Protocol):
    def select_results(self) -> List[Dict[str, Any]]:
        """Rows of the results table joined with their model, newest first."""
        ...

    def delete_result(self, result_id: str) -> int:
        """Delete one result row by id and return how many rows went away."""
        ...


class JsonFileStore:
    """
    Row store backed by a single JSON document:

        {"game_models": [{"id", "name", "type", "config"}, ...],
         "simulation_results": [{"id", "model_id", "results", "created_at"}, ...]}
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read store {self.path}", details=str(exc)) from exc
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} is not a JSON object")
        data.setdefault(MODELS_TABLE, [])
        data.setdefault(RESULTS_TABLE, [])
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StoreError(f"Cannot write store {self.path}", details=str(exc)) from exc

    def select_results(self) -> List[Dict[str, Any]]:
        data = self._load()
        models = {str(m.get("id")): m for m in data[MODELS_TABLE]}
        rows = []
        for row in data[RESULTS_TABLE]:
            model = models.get(str(row.get("model_id")))
            joined = dict(row)
            joined[MODELS_TABLE] = (
                {"name": model.get("name"), "type": model.get("type"), "config": model.get("config") or {}}
                if model
                else None
            )
            rows.append(joined)
        rows.sort(key=lambda r: parse_timestamp(r["created_at"]), reverse=True)
        logger.debug("Selected %d rows from %s", len(rows), self.path)
        return rows

    def delete_result(self, result_id: str) -> int:
        data = self._load()
        before = len(data[RESULTS_TABLE])
        data[RESULTS_TABLE] = [r for r in data[RESULTS_TABLE] if str(r.get("id")) != str(result_id)]
        removed = before - len(data[RESULTS_TABLE])
        if removed:
            self._save(data)
        return removed
