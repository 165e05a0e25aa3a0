"""In-memory document the default keywords draw on."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class StageAction:
    """A single native action performed on the stage."""
    action: str
    element: str
    detail: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Stage:
    def __init__(self, name: str = "document") -> None:
        self.name = name
        self.elements: Dict[str, Dict[str, Any]] = {}
        self.actions: List[StageAction] = []
        self._counters: Dict[str, int] = {}

    def __repr__(self) -> str:
        return f"Stage({self.name!r}, elements={len(self.elements)})"

    def _record(self, action: str, element: str, **detail: Any) -> None:
        self.actions.append(StageAction(action, element, detail))
        logger.debug("%s %s %r", action, element, detail)

    def _next_id(self, kind: str) -> str:
        self._counters[kind] = self._counters.get(kind, 0) + 1
        return f"{kind}-{self._counters[kind]}"

    def has(self, element: str) -> bool:
        return element in self.elements

    def create_shape(
        self,
        shape: str,
        dimension: Optional[str] = None,
        color: Optional[str] = None,
        position: Optional[str] = None,
    ) -> str:
        element = self._next_id(shape)
        self.elements[element] = {
            "kind": shape,
            "dimension": dimension,
            "color": color,
            "position": position,
            "text": "",
        }
        self._record("create", element, shape=shape, dimension=dimension, color=color, position=position)
        return element

    def write_text(self, text: str, element: str) -> None:
        self.elements.setdefault(element, {"kind": "text", "text": ""})["text"] = text
        self._record("write", element, text=text)

    def append_text(self, text: str, element: str) -> None:
        target = self.elements.setdefault(element, {"kind": "text", "text": ""})
        target["text"] = f"{target['text']} {text}".strip()
        self._record("add", element, text=text)

    def move(self, element: str, direction: str) -> None:
        target = self.elements.setdefault(element, {"kind": "text", "text": ""})
        target.setdefault("moves", []).append(direction)
        self._record("move", element, direction=direction)
