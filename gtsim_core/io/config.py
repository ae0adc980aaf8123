from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

ENV_PREFIX = "GTSIM_"


@dataclasses.dataclass(frozen=True)
class AppConfig:
    store_path: str = "gtsim_store.json"
    timezone: str = "UTC"
    export_dir: str = "exports"
    toast_ms: int = 3000


def load_app_config(path: Optional[str | Path] = None, environ: Optional[Dict[str, str]] = None) -> AppConfig:
    """
    Reads an optional JSON config file, then applies GTSIM_* environment overrides.
    """
    data: Dict[str, Any] = _read_json(path) if path else {}
    env = os.environ if environ is None else environ
    for field in dataclasses.fields(AppConfig):
        key = ENV_PREFIX + field.name.upper()
        if env.get(key):
            data[field.name] = env[key]
    defaults = AppConfig()
    return AppConfig(
        store_path=str(data.get("store_path", defaults.store_path)),
        timezone=str(data.get("timezone", defaults.timezone)),
        export_dir=str(data.get("export_dir", defaults.export_dir)),
        toast_ms=int(data.get("toast_ms", defaults.toast_ms)),
    )


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
