"""Keyword type catalog."""

from __future__ import annotations

from enum import Enum
from typing import Any


class KeywordType(Enum):
    """Semantic categories a keyword can belong to."""
    FUNCTION = "function"
    EVENT = "event"
    LOOP = "loop"
    CONDITIONAL = "conditional"
    STRING = "string"
    COLOR = "color"
    SHAPE = "shape"
    DIMENSION = "dimension"
    POSITION = "position"
    ELEMENT = "element"
    DIRECTION = "direction"

    @classmethod
    def coerce(cls, raw: Any) -> "KeywordType":
        """Accept a member, its value ("shape") or its name ("SHAPE")."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        raise ValueError(f"not a keyword type: {raw!r}")


FUNCTION = KeywordType.FUNCTION
EVENT = KeywordType.EVENT
LOOP = KeywordType.LOOP
CONDITIONAL = KeywordType.CONDITIONAL
STRING = KeywordType.STRING
COLOR = KeywordType.COLOR
SHAPE = KeywordType.SHAPE
DIMENSION = KeywordType.DIMENSION
POSITION = KeywordType.POSITION
ELEMENT = KeywordType.ELEMENT
DIRECTION = KeywordType.DIRECTION

# Wrappers defer their child until something fires them
WRAPPER_TYPES = frozenset({EVENT, LOOP, CONDITIONAL})

# Types that open a compiled node
INVOCABLE_TYPES = frozenset({FUNCTION}) | WRAPPER_TYPES

# Types that resolve to parameter values
VALUE_TYPES = frozenset(KeywordType) - INVOCABLE_TYPES
