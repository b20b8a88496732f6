"""Run-metadata sidecar — writes run-metadata.json alongside results."""

from __future__ import annotations

import datetime
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def build_run_metadata(command: str, config_path: Path | None, out_path: Path) -> dict[str, str]:
    return {
        "timestamp_utc": (
            datetime.datetime.now(datetime.UTC).isoformat().replace("+00:00", "Z")
        ),
        "command": command,
        "config_path": str(config_path.resolve()) if config_path is not None else "",
        "output_dir": str(out_path.resolve()),
    }


def write_run_metadata(meta: dict[str, str], out_path: Path) -> Path:
    """Write run-metadata.json to *out_path* and return the written path."""
    from pathlib import Path as _Path

    _Path(str(out_path)).mkdir(parents=True, exist_ok=True)
    out_file = _Path(str(out_path), "run-metadata.json")
    out_file.write_text(
        json.dumps(meta, sort_keys=True, indent=2) + "\n",
        encoding="utf-8",
    )
    return out_file
