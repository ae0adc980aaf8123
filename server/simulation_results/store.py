from __future__ import annotations

from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from gtsim_core.errors import StoreError

from .models import SimulationResult


def _to_row(result: SimulationResult) -> Dict[str, Any]:
    return {
        "id": str(result.id),
        "model_id": str(result.model_id),
        "results": result.results,
        "created_at": result.created_at,
        "game_models": {
            "name": result.model.name,
            "type": result.model.type,
            "config": result.model.config,
        },
    }


class DjangoResultStore:
    """Row store over the ORM; rows use the same shape as the JSON file store."""

    def select_results(self) -> List[Dict[str, Any]]:
        try:
            queryset = SimulationResult.objects.select_related("model").order_by("-created_at")
            return [_to_row(r) for r in queryset]
        except DatabaseError as exc:
            raise StoreError("Failed to query simulation_results", details=str(exc)) from exc

    def select_result(self, result_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = SimulationResult.objects.select_related("model").get(pk=result_id)
        except (SimulationResult.DoesNotExist, ValidationError):
            return None
        except DatabaseError as exc:
            raise StoreError(f"Failed to fetch simulation result {result_id}", details=str(exc)) from exc
        return _to_row(result)

    def delete_result(self, result_id: str) -> int:
        try:
            deleted, _ = SimulationResult.objects.filter(pk=result_id).delete()
        except ValidationError:
            return 0
        except DatabaseError as exc:
            raise StoreError(f"Failed to delete simulation result {result_id}", details=str(exc)) from exc
        return deleted
