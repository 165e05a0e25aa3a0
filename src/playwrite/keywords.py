"""Keyword registry: surface-word index plus per-type definition library."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

import yaml
from jsonschema import Draft7Validator

from .definitions import IndexEntry, KeywordDefinition
from .errors import (
    CatalogError,
    DuplicateKeywordError,
    InvariantViolation,
    UnknownKeywordError,
)
from .types import VALUE_TYPES, KeywordType
from .validator import build_definition, read_header

logger = logging.getLogger(__name__)

CATALOG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["type", "keywords"],
        "additionalProperties": False,
        "properties": {
            "type": {
                "type": "string",
                "enum": sorted(t.value for t in VALUE_TYPES),
            },
            "keywords": {
                "type": "array",
                "minItems": 1,
                "items": {"type": "string", "minLength": 1},
            },
            "value": {},
        },
    },
}

_catalog_validator = Draft7Validator(CATALOG_SCHEMA)


def validate_catalog(payload: Any) -> None:
    errors = sorted(_catalog_validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise CatalogError(f"keyword catalog validation failed: {messages}")


class KeywordRegistry:
    """
    Owns the index (word -> canonical id + type) and the library
    (type -> canonical id -> definition).

    Every index entry points at a library entry and every library entry is
    indexed by its canonical id. Registration checks everything before it
    touches either structure and holds a lock while it writes both.
    """

    def __init__(self) -> None:
        self._index: Dict[str, IndexEntry] = {}
        self._library: Dict[KeywordType, Dict[str, KeywordDefinition]] = {
            keyword_type: {} for keyword_type in KeywordType
        }
        self._lock = threading.Lock()

    def register(self, data: Mapping[str, Any]) -> KeywordDefinition:
        keyword_type, words = read_header(data)

        with self._lock:
            seen = set()
            for word in words:
                if word in self._index or word in seen:
                    raise DuplicateKeywordError(word)
                seen.add(word)

            definition = build_definition(keyword_type, words, data)

            self._library[keyword_type][definition.canonical_id] = definition
            entry = IndexEntry(definition.canonical_id, keyword_type)
            for word in words:
                self._index[word] = entry

        logger.debug(
            "Registered %s keyword %s (%s)",
            keyword_type.value, definition.canonical_id, ", ".join(words),
        )
        return definition

    def register_many(self, payloads: List[Mapping[str, Any]]) -> List[KeywordDefinition]:
        return [self.register(payload) for payload in payloads]

    def load_catalog(self, path: Path) -> List[KeywordDefinition]:
        """Register value keywords declared in a YAML catalog file."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or []
        validate_catalog(data)
        definitions = self.register_many(data)
        logger.info("Loaded %d keywords from %s", len(definitions), path)
        return definitions

    def resolve(self, word: str) -> Optional[IndexEntry]:
        return self._index.get(word.strip().lower())

    def definition_for(self, canonical_id: str, keyword_type: KeywordType) -> KeywordDefinition:
        definition = self._library[keyword_type].get(canonical_id)
        if definition is None:
            raise UnknownKeywordError(canonical_id, keyword_type)
        return definition

    def lookup(self, word: str) -> Optional[KeywordDefinition]:
        entry = self.resolve(word)
        if entry is None:
            return None
        return self.definition_for(entry.canonical_id, entry.type)

    def words(self) -> Dict[str, IndexEntry]:
        return dict(self._index)

    def definitions(self, keyword_type: Optional[KeywordType] = None) -> List[KeywordDefinition]:
        if keyword_type is not None:
            return list(self._library[keyword_type].values())
        return [d for bucket in self._library.values() for d in bucket.values()]

    def check_consistency(self) -> None:
        for word, entry in self._index.items():
            if entry.canonical_id not in self._library[entry.type]:
                raise InvariantViolation(f'index word "{word}" has no library entry')
        for keyword_type, bucket in self._library.items():
            for canonical_id in bucket:
                if self._index.get(canonical_id) != IndexEntry(canonical_id, keyword_type):
                    raise InvariantViolation(f'library entry "{canonical_id}" is not indexed')

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.resolve(word) is not None

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._index))
