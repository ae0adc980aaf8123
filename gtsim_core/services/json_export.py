from __future__ import annotations

import json
from typing import Any, Dict, List

from gtsim_core.domain.models import SimulationResultRecord

INDENT = 2


def encode_json(record: SimulationResultRecord) -> str:
    """
    Serialize the raw round list exactly as stored. Extra per-round keys that
    the CSV projection drops are kept here.
    """
    return json.dumps(record.raw_results(), indent=INDENT, ensure_ascii=False)


def decode_json(text: str) -> List[Dict[str, Any]]:
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Exported results must be a JSON array")
    return data
