from __future__ import annotations

import logging
from pathlib import Path

from celery import shared_task
from django.conf import settings

from gtsim_core.io.records import record_from_row
from gtsim_core.services import exporter

from .store import DjangoResultStore

logger = logging.getLogger(__name__)


def _export_dir() -> Path:
    return Path(settings.MEDIA_ROOT) / "exports"


@shared_task
def export_result(result_id: str):
    row = DjangoResultStore().select_result(result_id)
    if row is None:
        logger.warning("Result %s vanished before export", result_id)
        return None

    outcome = exporter.export_record(
        record_from_row(row),
        _export_dir(),
        tz=settings.GTSIM_TIMEZONE,
        toast_ms=settings.GTSIM_TOAST_MS,
    )
    return {
        "ok": outcome.ok,
        "files": [str(p) for p in outcome.value or []],
        "notification": outcome.notification.to_dict() if outcome.notification else None,
    }
