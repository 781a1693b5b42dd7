"""JSONL trail of resolution events.

Each resolution appends one line::

    {"timestamp": "...", "event": "resolution", "request_id": "3f9c...", ...result fields}

The request id ties the line back to the caller's request (a page view, a CLI
invocation). Callers that do not supply one get a fresh id per resolution.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class TraceLogger:
    """Appends resolution events to ``path``; a disabled logger writes nothing."""

    path: Path
    enabled: bool = True

    def record(self, event: str, fields: Mapping[str, Any], *, request_id: str) -> None:
        if not self.enabled:
            return

        line = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "request_id": request_id,
            **fields,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(line, ensure_ascii=False) + "\n")


def build_trace_logger(path: Path | str, enabled: bool = True) -> TraceLogger:
    return TraceLogger(Path(path), enabled=enabled)


__all__ = ["TraceLogger", "build_trace_logger", "new_request_id"]
