"""Registered keyword records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional, Tuple

from .types import KeywordType


class IndexEntry(NamedTuple):
    canonical_id: str
    type: KeywordType


class Slot(NamedTuple):
    type: KeywordType
    required: bool


@dataclass(frozen=True)
class KeywordDefinition:
    """One registered capability.

    Only the fields relevant to ``type`` are populated; the rest keep their
    defaults. ``value`` is what a value-typed word hands to a handler when it
    fills a slot.
    """
    canonical_id: str
    type: KeywordType
    words: Tuple[str, ...]
    required: Tuple[KeywordType, ...] = ()
    optional: Tuple[KeywordType, ...] = ()
    handler: Optional[Callable[..., Any]] = None
    predicate: Optional[Callable[..., Any]] = None
    produces: Optional[KeywordType] = None
    bind_to: Any = None
    requires_element: bool = False
    signal: Optional[str] = None
    value: Any = None

    @property
    def slots(self) -> Tuple[Slot, ...]:
        return tuple(Slot(t, True) for t in self.required) + tuple(
            Slot(t, False) for t in self.optional
        )

    @property
    def arity(self) -> int:
        return len(self.required) + len(self.optional)

    @property
    def signal_name(self) -> str:
        return self.signal or self.canonical_id
