from gtsim_core.services.charting import build_chart, check_roster_stability, derive_series_keys  # noqa: F401
from gtsim_core.services.csv_export import encode_csv, parse_csv  # noqa: F401
from gtsim_core.services.exporter import build_export, export_record, format_timestamp  # noqa: F401
from gtsim_core.services.json_export import decode_json, encode_json  # noqa: F401
from gtsim_core.services.repository import ResultRepository, ResultsView  # noqa: F401

__all__ = [
    "build_chart",
    "check_roster_stability",
    "derive_series_keys",
    "encode_csv",
    "parse_csv",
    "build_export",
    "export_record",
    "format_timestamp",
    "decode_json",
    "encode_json",
    "ResultRepository",
    "ResultsView",
]
