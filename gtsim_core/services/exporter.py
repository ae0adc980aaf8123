from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from typing import List
from zoneinfo import ZoneInfo

from gtsim_core.domain.models import ExportArtifact, ExportBundle, Notification, Outcome, SimulationResultRecord
from gtsim_core.services.csv_export import csv_bytes, encode_csv
from gtsim_core.services.json_export import encode_json

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M"
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
JSON_MEDIA_TYPE = "application/json"
EXPORT_OK = "导出成功"
EXPORT_FAILED = "导出失败"

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\r\n]')


def format_timestamp(created_at: dt.datetime, tz: str = "UTC") -> str:
    """Fixed-width YYYYMMDDHHMM in the display timezone, no separators."""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=dt.timezone.utc)
    return created_at.astimezone(ZoneInfo(tz)).strftime(TIMESTAMP_FORMAT)


def export_basename(record: SimulationResultRecord, tz: str = "UTC") -> str:
    name = _UNSAFE_CHARS.sub("_", record.model.name)
    return f"{name}_{format_timestamp(record.created_at, tz)}"


def build_export(record: SimulationResultRecord, tz: str = "UTC") -> ExportBundle:
    base = export_basename(record, tz)
    return ExportBundle(
        basename=base,
        csv=ExportArtifact(filename=f"{base}.csv", content=csv_bytes(encode_csv(record)), media_type=CSV_MEDIA_TYPE),
        json=ExportArtifact(
            filename=f"{base}.json", content=encode_json(record).encode("utf-8"), media_type=JSON_MEDIA_TYPE
        ),
    )


def export_record(
    record: SimulationResultRecord,
    out_dir: str | Path,
    tz: str = "UTC",
    toast_ms: int = 3000,
) -> Outcome[List[Path]]:
    """
    Write the CSV and JSON artifacts of one record. Files already written are
    left in place when a later step fails.
    """
    written: List[Path] = []
    try:
        bundle = build_export(record, tz)
        target = Path(out_dir)
        target.mkdir(parents=True, exist_ok=True)
        for artifact in bundle.artifacts:
            path = target / artifact.filename
            path.write_bytes(artifact.content)
            written.append(path)
            logger.info("Exported %s", path)
    except Exception:  # noqa: BLE001
        logger.exception("Export of result %s failed", getattr(record, "id", None))
        return Outcome.failure(Notification(type="error", message=EXPORT_FAILED, duration=toast_ms), value=written)
    return Outcome.success(written, Notification(type="success", message=EXPORT_OK, duration=toast_ms))
