"""Per-type admission rules for keyword definitions."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Tuple

from .definitions import KeywordDefinition
from .errors import (
    EmptyKeywordListError,
    InvalidDefinitionError,
    MissingTypeError,
    UnsupportedTypeError,
)
from .types import (
    CONDITIONAL,
    ELEMENT,
    EVENT,
    FUNCTION,
    LOOP,
    VALUE_TYPES,
    KeywordType,
)

COMMON_FIELDS = frozenset({"type", "keywords"})

TYPE_FIELDS: Dict[KeywordType, FrozenSet[str]] = {
    FUNCTION: frozenset({"required", "optional", "handler", "produces"}),
    EVENT: frozenset({"bind_to", "requires_element", "signal"}),
    LOOP: frozenset({"required", "optional", "handler"}),
    CONDITIONAL: frozenset({"required", "optional", "predicate"}),
}
for _value_type in VALUE_TYPES:
    TYPE_FIELDS[_value_type] = frozenset({"value"})

# Older catalogs spelled these several ways; only one name is accepted now
LEGACY_FIELDS = {
    "keyword": "keywords",
    "words": "keywords",
    "word": "keywords",
    "req": "required",
    "opt": "optional",
    "exec": "handler",
    "bindTo": "bind_to",
    "reqElement": "requires_element",
}


def accepts_positional(func: Callable[..., Any], count: int) -> bool:
    """Return True if ``func`` can be called with ``count`` positional args."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without metadata; nothing to check against
        return True
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


def normalize_word(word: Any) -> str:
    if not isinstance(word, str) or not word.strip():
        raise InvalidDefinitionError(f"keywords must be non-empty strings, got {word!r}")
    normalized = word.strip().lower()
    if any(ch.isspace() for ch in normalized):
        raise InvalidDefinitionError(f'keyword "{normalized}" contains whitespace')
    return normalized


def read_header(data: Mapping[str, Any]) -> Tuple[KeywordType, Tuple[str, ...]]:
    """Check field names, type and keywords; return the coerced pair."""
    for legacy, preferred in LEGACY_FIELDS.items():
        if legacy in data:
            raise InvalidDefinitionError(
                f'unsupported field "{legacy}", use "{preferred}"'
            )

    raw_type = data.get("type")
    raw_words = data.get("keywords")
    if raw_type is None:
        raise MissingTypeError(raw_words)
    if isinstance(raw_words, str):
        raw_words = [raw_words]
    if not raw_words:
        raise EmptyKeywordListError()

    try:
        keyword_type = KeywordType.coerce(raw_type)
    except ValueError:
        raise UnsupportedTypeError(raw_type) from None

    words = tuple(normalize_word(word) for word in raw_words)
    return keyword_type, words


def _slot_types(data: Mapping[str, Any], field_name: str) -> Tuple[KeywordType, ...]:
    raw = data.get(field_name) or ()
    slots: List[KeywordType] = []
    for item in raw:
        try:
            slot_type = KeywordType.coerce(item)
        except ValueError:
            raise InvalidDefinitionError(f"{field_name}: unknown slot type {item!r}") from None
        if slot_type not in VALUE_TYPES:
            raise InvalidDefinitionError(
                f"{field_name}: {slot_type.value} cannot be used as a parameter"
            )
        slots.append(slot_type)
    return tuple(slots)


def _function(base: Dict[str, Any], data: Mapping[str, Any]) -> KeywordDefinition:
    handler = data.get("handler")
    if handler is None or not callable(handler):
        raise InvalidDefinitionError("missing handler")
    required = _slot_types(data, "required")
    optional = _slot_types(data, "optional")
    if not accepts_positional(handler, len(required) + len(optional)):
        raise InvalidDefinitionError(
            f"handler for \"{base['canonical_id']}\" must accept "
            f"{len(required) + len(optional)} positional arguments"
        )

    produces = data.get("produces")
    if produces is not None:
        try:
            produces = KeywordType.coerce(produces)
        except ValueError:
            raise InvalidDefinitionError(f"produces: unknown type {produces!r}") from None
        if produces not in VALUE_TYPES:
            raise InvalidDefinitionError(f"produces: {produces.value} is not a value type")

    return KeywordDefinition(
        required=required, optional=optional, handler=handler, produces=produces, **base
    )


def _event(base: Dict[str, Any], data: Mapping[str, Any]) -> KeywordDefinition:
    bind_to = data.get("bind_to")
    requires_element = bool(data.get("requires_element", False))
    if (bind_to is None) == (not requires_element):
        # neither given, or both given
        raise InvalidDefinitionError("no bind target")
    signal = data.get("signal")
    if signal is not None and (not isinstance(signal, str) or not signal):
        raise InvalidDefinitionError(f"signal must be a non-empty string, got {signal!r}")

    return KeywordDefinition(
        optional=(ELEMENT,) if requires_element else (),
        bind_to=bind_to,
        requires_element=requires_element,
        signal=signal,
        **base,
    )


def _loop(base: Dict[str, Any], data: Mapping[str, Any]) -> KeywordDefinition:
    handler = data.get("handler")
    if handler is None or not callable(handler):
        raise InvalidDefinitionError("missing handler")
    required = _slot_types(data, "required")
    optional = _slot_types(data, "optional")
    if not accepts_positional(handler, 1 + len(required) + len(optional)):
        raise InvalidDefinitionError(
            "loop handler must accept the body followed by every parameter"
        )
    return KeywordDefinition(required=required, optional=optional, handler=handler, **base)


def _conditional(base: Dict[str, Any], data: Mapping[str, Any]) -> KeywordDefinition:
    predicate = data.get("predicate")
    if predicate is None or not callable(predicate):
        raise InvalidDefinitionError("missing predicate")
    required = _slot_types(data, "required")
    optional = _slot_types(data, "optional")
    if not accepts_positional(predicate, len(required) + len(optional)):
        raise InvalidDefinitionError(
            f"predicate must accept {len(required) + len(optional)} positional arguments"
        )
    return KeywordDefinition(required=required, optional=optional, predicate=predicate, **base)


def _value(base: Dict[str, Any], data: Mapping[str, Any]) -> KeywordDefinition:
    value = data.get("value", base["canonical_id"])
    return KeywordDefinition(value=value, **base)


_BUILDERS = {
    FUNCTION: _function,
    EVENT: _event,
    LOOP: _loop,
    CONDITIONAL: _conditional,
}


def build_definition(
    keyword_type: KeywordType, words: Tuple[str, ...], data: Mapping[str, Any]
) -> KeywordDefinition:
    """Run the admission rules for ``keyword_type`` and build the record."""
    allowed = COMMON_FIELDS | TYPE_FIELDS[keyword_type]
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise InvalidDefinitionError(
            f"unsupported field(s) for {keyword_type.value}: {', '.join(unknown)}"
        )

    base = {"canonical_id": words[0], "type": keyword_type, "words": words}
    builder = _BUILDERS.get(keyword_type, _value)
    return builder(base, data)
