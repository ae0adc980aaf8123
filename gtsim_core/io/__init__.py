from gtsim_core.io.config import AppConfig, load_app_config  # noqa: F401
from gtsim_core.io.records import record_from_row  # noqa: F401
from gtsim_core.io.store import JsonFileStore, ResultStore  # noqa: F401

__all__ = [
    "AppConfig",
    "load_app_config",
    "record_from_row",
    "JsonFileStore",
    "ResultStore",
]
