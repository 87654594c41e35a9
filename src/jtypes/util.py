import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

# Returned by `get_path` when the key path does not resolve. JSON null is None.
MISSING = object()


def read_json(input_path: Path) -> Any:
    """Read JSON from `input_path`. If it's '-', read from stdin."""
    if input_path.name == "-":
        return json.load(sys.stdin)
    else:
        return json.loads(input_path.read_bytes())


def write_lines(lines: Iterable[str], output_path: Path) -> None:
    """Write `lines` as-is to `output_path`. If it's '-', print to stdout."""
    if output_path.name == "-":
        sys.stdout.writelines(lines)
    else:
        with output_path.open("w") as f:
            f.writelines(lines)


def get_path(data: dict[str, Any], path: str) -> Any:
    for part in path.split("."):
        if not isinstance(data, dict) or part not in data:
            return MISSING
        data = data[part]
    return data
