from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def ensure_dirs(*paths: str | Path) -> None:
    for p in paths:
        Path(p).mkdir(parents=True, exist_ok=True)


def write_json(payload: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8-sig").strip())


def getenv(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if value is not None and not value.strip():
        return default
    return value
