"""Default keyword catalog.

Functions, events, loops and conditionals are declared here because their
handlers are code; the value vocabulary lives in ``config/keywords.yml``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .definitions import KeywordDefinition
from .keywords import KeywordRegistry
from .stage import Stage
from .types import (
    COLOR,
    CONDITIONAL,
    DIMENSION,
    DIRECTION,
    ELEMENT,
    EVENT,
    FUNCTION,
    LOOP,
    POSITION,
    SHAPE,
    STRING,
)

logger = logging.getLogger(__name__)

DEFAULT_REPEAT = 2
DEFAULT_CATALOG_PATH = Path("config/keywords.yml")


def repeat_count(dimension: Any) -> int:
    """Turn a dimension value ("3x", 3, None) into a repeat count."""
    if dimension is None:
        return DEFAULT_REPEAT
    if isinstance(dimension, int):
        return max(dimension, 0)
    text = str(dimension).strip().lower().rstrip("x")
    return int(text) if text.isdigit() else DEFAULT_REPEAT


def default_definitions(stage: Stage) -> List[Dict[str, Any]]:
    def create(shape, dimension, color, position):
        return stage.create_shape(shape, dimension, color, position)

    def write(string, element):
        stage.write_text(string, element)

    def add(element, string):
        if not string:
            raise ValueError("Add what?")
        stage.append_text(string, element or "body")

    def move(element, direction):
        stage.move(element, direction)

    def repeat(body, dimension):
        count = repeat_count(dimension)
        return [body() for _ in range(count)]

    def unless(element):
        return not stage.has(element)

    return [
        {
            "type": FUNCTION,
            "keywords": ["create", "draw", "make"],
            "required": [SHAPE],
            "optional": [DIMENSION, COLOR, POSITION],
            "produces": ELEMENT,
            "handler": create,
        },
        {
            "type": FUNCTION,
            "keywords": ["write", "say"],
            "required": [STRING, ELEMENT],
            "handler": write,
        },
        {
            "type": FUNCTION,
            "keywords": ["add", "append"],
            "optional": [ELEMENT, STRING],
            "handler": add,
        },
        {
            "type": FUNCTION,
            "keywords": ["move", "push"],
            "required": [ELEMENT, DIRECTION],
            "handler": move,
        },
        {
            "type": EVENT,
            "keywords": ["load", "loads", "loaded"],
            "bind_to": stage,
            "signal": "load",
        },
        {
            "type": EVENT,
            "keywords": ["click", "clicks", "clicked"],
            "requires_element": True,
            "signal": "click",
        },
        {
            "type": LOOP,
            "keywords": ["repeat", "repeatedly"],
            "optional": [DIMENSION],
            "handler": repeat,
        },
        {
            "type": CONDITIONAL,
            "keywords": ["unless"],
            "required": [ELEMENT],
            "predicate": unless,
        },
    ]


def register_defaults(
    registry: KeywordRegistry,
    stage: Stage,
    catalog_path: Optional[Path] = None,
) -> List[KeywordDefinition]:
    """Register the built-in keywords and the value vocabulary."""
    definitions = registry.register_many(default_definitions(stage))
    path = Path(catalog_path) if catalog_path is not None else DEFAULT_CATALOG_PATH
    definitions.extend(registry.load_catalog(path))
    logger.info("Default catalog ready: %d definitions, %d words", len(definitions), len(registry))
    return definitions
