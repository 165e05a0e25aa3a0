"""Command log schema enforcement."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

COMMAND_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": [
        "index",
        "command",
        "tokens",
        "keywords",
        "skipped",
        "status",
        "root_type",
        "error",
        "handled_at",
    ],
    "properties": {
        "index": {"type": "integer", "minimum": 0},
        "command": {"type": "string"},
        "tokens": {"type": "array", "items": {"type": "string"}},
        "keywords": {"type": "array", "items": {"type": "string"}},
        "skipped": {"type": "array", "items": {"type": "string"}},
        "status": {"type": "string", "enum": ["ran", "bound", "empty", "failed"]},
        "root_type": {
            "type": ["string", "null"],
            "enum": ["function", "event", "loop", "conditional", None],
        },
        "error": {"type": ["string", "null"]},
        "handled_at": {"type": "string", "format": "date-time"},
    },
}

_validator = Draft7Validator(COMMAND_SCHEMA)


def validate_record(payload: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ValueError(f"command log validation failed: {messages}")


@dataclass
class CommandRecord:
    index: int
    command: str
    tokens: List[str]
    keywords: List[str]
    skipped: List[str]
    status: str
    root_type: Optional[str] = None
    error: Optional[str] = None
    handled_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "index": self.index,
            "command": self.command,
            "tokens": list(self.tokens),
            "keywords": list(self.keywords),
            "skipped": list(self.skipped),
            "status": self.status,
            "root_type": self.root_type,
            "error": self.error,
            "handled_at": self.handled_at,
        }
        validate_record(payload)
        return payload
