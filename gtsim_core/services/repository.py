from __future__ import annotations

import logging
from typing import Callable, List, Optional

from gtsim_core.domain.models import Notification, Outcome, SimulationResultRecord
from gtsim_core.errors import AppError, RecordFormatError
from gtsim_core.io.records import record_from_row
from gtsim_core.io.store import ResultStore

logger = logging.getLogger(__name__)

FETCH_OK = "获取仿真结果成功"
FETCH_FAILED = "获取仿真结果失败"
DELETE_OK = "删除成功"
DELETE_FAILED = "删除失败"
DELETE_PROMPT = "确定要删除这个仿真结果吗？"

Confirm = Callable[[str], bool]


class ResultRepository:
    def __init__(self, store: ResultStore, toast_ms: int = 3000):
        self.store = store
        self.toast_ms = toast_ms

    def _notice(self, kind: str, message: str) -> Notification:
        return Notification(type=kind, message=message, duration=self.toast_ms)

    def list(self) -> Outcome[List[SimulationResultRecord]]:
        """All records with their model, newest first. Failures come back as an empty list."""
        try:
            rows = self.store.select_results()
        except Exception as exc:  # noqa: BLE001
            details = exc.details if isinstance(exc, AppError) else None
            logger.error("获取仿真结果失败: %s (details=%r)", exc, details, exc_info=exc)
            return Outcome.failure(self._notice("error", FETCH_FAILED), value=[])

        records: List[SimulationResultRecord] = []
        for row in rows:
            try:
                records.append(record_from_row(row))
            except RecordFormatError as exc:
                logger.warning("Skipping result row %r: %s", row.get("id"), exc.message)
        return Outcome.success(records, self._notice("success", FETCH_OK))

    def delete(self, result_id: str, confirm: Confirm) -> Outcome[str]:
        """
        Delete one record after an explicit confirmation.
        Declining returns a failed outcome with no notification.
        """
        if not confirm(DELETE_PROMPT):
            return Outcome(ok=False, value=result_id, notification=None)
        try:
            removed = self.store.delete_result(result_id)
            if not removed:
                raise AppError(f"No result with id {result_id!r}", code="not-found")
        except Exception as exc:  # noqa: BLE001
            logger.error("删除仿真结果失败: %s", exc, exc_info=exc)
            return Outcome.failure(self._notice("error", DELETE_FAILED), value=result_id)
        logger.info("Deleted result %s", result_id)
        return Outcome.success(result_id, self._notice("success", DELETE_OK))


class ResultsView:
    """
    In-memory list and selection owned by the admin view. Only repository
    completions mutate it.
    """

    def __init__(self, repository: ResultRepository):
        self.repository = repository
        self.records: List[SimulationResultRecord] = []
        self.selected: Optional[SimulationResultRecord] = None
        self.loading = True

    def load(self) -> Outcome[List[SimulationResultRecord]]:
        self.loading = True
        try:
            outcome = self.repository.list()
            self.records = list(outcome.value or [])
        finally:
            self.loading = False
        return outcome

    def get(self, result_id: str) -> Optional[SimulationResultRecord]:
        for record in self.records:
            if record.id == result_id:
                return record
        return None

    def select(self, result_id: str) -> Optional[SimulationResultRecord]:
        self.selected = self.get(result_id)
        return self.selected

    def clear_selection(self) -> None:
        self.selected = None

    def delete(self, result_id: str, confirm: Confirm) -> Outcome[str]:
        outcome = self.repository.delete(result_id, confirm)
        if outcome.ok:
            self.records = [r for r in self.records if r.id != result_id]
            if self.selected is not None and self.selected.id == result_id:
                self.selected = None
        return outcome
