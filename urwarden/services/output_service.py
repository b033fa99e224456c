"""
JSON Lines output: one result object per line.
"""

import json
import sys
from typing import Any, Dict, Optional, TextIO

from urwarden.schemas.result_schemas import Result


def result_to_dict(result: Result) -> Dict[str, Any]:
    data = result.model_dump(mode="json")
    data["reasons"] = list(data.get("reasons") or [])
    return data


def write_result_json(result: Result, stream: Optional[TextIO] = None):
    """Write a result as a single compact JSON line (no ASCII/HTML escaping)."""
    stream = stream if stream is not None else sys.stdout
    stream.write(json.dumps(result_to_dict(result), ensure_ascii=False, separators=(",", ":")))
    stream.write("\n")
    stream.flush()
