"""Reading and validating raw reference documents.

Reference data arrives as JSON or YAML documents with loosely agreed shapes.
The helpers here are intentionally conservative:
- they validate required fields
- they report the exact location of a problem (``providers[3].serviceId``)

so a broken dataset fails fast at startup with a readable message.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

from ..errors import InvalidReferenceData


def require(obj: Dict[str, Any], keys: Iterable[str], *, ctx: str) -> Any:
    """Return the first non-empty value among ``keys``; raise if none is present."""

    keys = tuple(keys)
    for key in keys:
        value = obj.get(key)
        if value is not None and value != "":
            return value
    wanted = " / ".join(f"'{k}'" for k in keys)
    raise InvalidReferenceData(f"Missing required key {wanted} in {ctx}")


def load_document(path: Path) -> Any:
    """Parse a .json / .yaml / .yml file."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as ex:
        raise InvalidReferenceData(f"Cannot read reference file {path}: {ex}") from ex

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(raw)
        if suffix == ".json":
            return json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as ex:
        raise InvalidReferenceData(f"Malformed reference file {path}: {ex}") from ex
    raise InvalidReferenceData(f"Unsupported reference file type: {path}")


def find_document(base_dir: Path, stem: str, suffixes: Iterable[str]) -> Optional[Path]:
    for suffix in suffixes:
        candidate = base_dir / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


__all__ = ["require", "load_document", "find_document"]
