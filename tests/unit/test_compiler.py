#!/usr/bin/env python3
"""
Unit tests for the command compiler
"""

import pytest
from unittest.mock import MagicMock

from playwrite.compiler import Compiler
from playwrite.errors import IncompleteCommandError, UnexpectedKeywordError
from playwrite.keywords import KeywordRegistry
from playwrite.types import (
    COLOR, CONDITIONAL, DIMENSION, ELEMENT, EVENT, FUNCTION, LOOP, SHAPE, STRING,
)


@pytest.fixture
def registry():
    reg = KeywordRegistry()
    reg.register({"type": EVENT, "keywords": ["load", "loads"], "bind_to": MagicMock(name="document")})
    reg.register({"type": EVENT, "keywords": ["click"], "requires_element": True})
    reg.register({
        "type": FUNCTION,
        "keywords": ["create"],
        "required": [SHAPE],
        "optional": [DIMENSION, COLOR],
        "produces": ELEMENT,
        "handler": lambda shape, dimension, color: shape,
    })
    reg.register({
        "type": FUNCTION,
        "keywords": ["write"],
        "required": [STRING, ELEMENT],
        "handler": lambda string, element: None,
    })
    reg.register({
        "type": FUNCTION,
        "keywords": ["paint"],
        "required": [COLOR],
        "optional": [ELEMENT],
        "handler": lambda color, element: None,
    })
    reg.register({"type": LOOP, "keywords": ["repeat"], "optional": [DIMENSION],
                  "handler": lambda body, times: body()})
    reg.register({"type": CONDITIONAL, "keywords": ["unless"], "required": [ELEMENT],
                  "predicate": lambda element: True})
    reg.register({"type": SHAPE, "keywords": ["circle", "ball"]})
    reg.register({"type": SHAPE, "keywords": ["square"]})
    reg.register({"type": COLOR, "keywords": ["red"], "value": "#ff0000"})
    reg.register({"type": COLOR, "keywords": ["blue"], "value": "#0000ff"})
    reg.register({"type": DIMENSION, "keywords": ["large"]})
    reg.register({"type": ELEMENT, "keywords": ["banner"]})
    reg.register({"type": STRING, "keywords": ["hello"], "value": "Hello!"})
    return reg


@pytest.fixture
def compiler(registry):
    return Compiler(registry)


def bound(node):
    return [value if filled else None for value, filled in zip(node.values, node.filled)]


# ── Single commands ──────────────────────────────────────────────

class TestSingleFunction:

    def test_required_slot_bound(self, compiler):
        root = compiler.compile(["create", "circle"])
        assert root.keyword == "create"
        assert root.values == ["circle", None, None]
        assert root.filled == [True, False, False]
        assert root.child is None

    def test_optional_slots_fill_by_type(self, compiler):
        root = compiler.compile(["create", "red", "circle", "large"])
        assert root.values == ["circle", "large", "#ff0000"]

    def test_optional_absent_is_none(self, compiler):
        root = compiler.compile(["create", "square"])
        assert root.values[2] is None
        assert root.filled[2] is False

    def test_alias_resolves_to_canonical_value(self, compiler):
        root = compiler.compile(["create", "ball"])
        assert root.values[0] == "circle"
        assert root.words == ["create", "ball"]

    def test_missing_required(self, compiler):
        with pytest.raises(IncompleteCommandError) as excinfo:
            compiler.compile(["create", "red"])
        assert excinfo.value.canonical_id == "create"
        assert excinfo.value.missing_type is SHAPE

    def test_second_value_of_same_type_has_nowhere_to_go(self, compiler):
        with pytest.raises(UnexpectedKeywordError) as excinfo:
            compiler.compile(["create", "circle", "square"])
        assert excinfo.value.word == "square"


# ── Filler and empty commands ────────────────────────────────────

class TestFiller:

    def test_filler_is_ignored(self, compiler):
        noisy = compiler.compile(["the", "create", "a", "circle"])
        clean = compiler.compile(["create", "circle"])
        assert noisy.describe() == clean.describe()

    def test_no_keywords_compiles_to_none(self, compiler):
        assert compiler.compile(["can", "you", "please"]) is None
        assert compiler.compile([]) is None

    def test_value_without_function(self, compiler):
        with pytest.raises(UnexpectedKeywordError):
            compiler.compile(["a", "red", "circle"])

    def test_compile_text(self, compiler):
        root = compiler.compile_text("Please, create a RED circle!")
        assert root.values == ["circle", None, "#ff0000"]


# ── Nesting ──────────────────────────────────────────────────────

class TestNesting:

    def test_event_wraps_function(self, compiler):
        root = compiler.compile(["load", "create", "circle"])
        assert root.definition.type is EVENT
        assert root.keyword == "load"
        assert root.child.keyword == "create"
        assert root.child.values[0] == "circle"
        assert root.child.child is None

    def test_chain_is_in_token_order(self, compiler):
        root = compiler.compile(["load", "repeat", "create", "circle"])
        assert [node.keyword for node in root.chain()] == ["load", "repeat", "create"]

    def test_value_binds_to_innermost_open_node(self, compiler):
        root = compiler.compile(["paint", "red", "create", "circle", "blue"])
        assert root.values == ["#ff0000", None]
        assert root.child.values == ["circle", None, "#0000ff"]

    def test_innermost_wins_when_both_could_take_it(self, compiler):
        root = compiler.compile(["paint", "red", "write", "hello", "banner"])
        assert bound(root) == ["#ff0000", None]
        assert bound(root.child) == ["Hello!", "banner"]

    def test_value_falls_back_to_outer_node(self, compiler):
        root = compiler.compile(["write", "hello", "create", "circle", "banner"])
        assert root.values == ["Hello!", "banner"]
        assert root.fed_slot is None

    def test_function_result_feeds_parent(self, compiler):
        root = compiler.compile(["write", "hello", "create", "circle"])
        assert root.fed_slot == 1
        assert root.filled == [True, False]
        assert root.child.keyword == "create"

    def test_missing_slot_not_fed_by_non_producer(self, compiler):
        with pytest.raises(IncompleteCommandError) as excinfo:
            compiler.compile(["write", "hello", "paint", "red"])
        assert excinfo.value.canonical_id == "write"
        assert excinfo.value.missing_type is ELEMENT

    def test_missing_slot_in_inner_node(self, compiler):
        with pytest.raises(IncompleteCommandError) as excinfo:
            compiler.compile(["load", "create", "large"])
        assert excinfo.value.canonical_id == "create"

    def test_click_takes_element(self, compiler):
        root = compiler.compile(["click", "banner", "create", "circle"])
        assert bound(root) == ["banner"]
        assert root.child.keyword == "create"

    def test_event_is_never_fed(self, compiler):
        root = compiler.compile(["click", "create", "circle"])
        assert root.fed_slot is None
        assert root.filled == [False]

    def test_conditional_required_element(self, compiler):
        with pytest.raises(IncompleteCommandError):
            compiler.compile(["unless", "create", "circle"])
        root = compiler.compile(["unless", "banner", "create", "circle"])
        assert root.values == ["banner"]

    def test_compile_leaves_registry_alone(self, compiler, registry):
        before = registry.words()
        with pytest.raises(IncompleteCommandError):
            compiler.compile(["create"])
        assert registry.words() == before

    def test_describe(self, compiler):
        tree = compiler.compile(["load", "create", "circle"]).describe()
        assert tree["keyword"] == "load"
        assert tree["type"] == "event"
        assert tree["child"]["params"][0] == {
            "type": "shape", "required": True, "value": "circle", "fed": False,
        }
