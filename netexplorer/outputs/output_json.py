"""JSON output — deterministic result files."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import BaseModel


def to_json(result: BaseModel) -> str:
    """Serialize *result* so the same input always yields the same bytes."""
    return json.dumps(result.model_dump(mode="json"), sort_keys=True, indent=2) + "\n"


def render_json(result: BaseModel, out_path: Path, name: str) -> Path:
    """Write ``<name>.json`` to *out_path* and return the written path."""
    from pathlib import Path as _Path

    _Path(str(out_path)).mkdir(parents=True, exist_ok=True)
    out_file = _Path(str(out_path), f"{name}.json")
    out_file.write_text(to_json(result), encoding="utf-8")
    return out_file
