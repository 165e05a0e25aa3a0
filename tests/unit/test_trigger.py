#!/usr/bin/env python3
"""
Unit tests for the execution trigger and event host
"""

import pytest
from unittest.mock import MagicMock

from playwrite.compiler import Compiler
from playwrite.errors import BindingError, InvariantViolation
from playwrite.keywords import KeywordRegistry
from playwrite.trigger import EventHost, ExecutionTrigger
from playwrite.types import (
    COLOR, CONDITIONAL, DIMENSION, ELEMENT, EVENT, FUNCTION, LOOP, SHAPE, STRING,
)


@pytest.fixture
def document():
    return MagicMock(name="document")


@pytest.fixture
def handlers():
    create = MagicMock(name="create", return_value="circle-1")
    write = MagicMock(name="write", return_value=None)
    return {"create": create, "write": write}


@pytest.fixture
def compiler(document, handlers):
    reg = KeywordRegistry()
    reg.register({"type": EVENT, "keywords": ["load"], "bind_to": document})
    reg.register({"type": EVENT, "keywords": ["click"], "requires_element": True})
    reg.register({
        "type": FUNCTION, "keywords": ["create"],
        "required": [SHAPE], "optional": [COLOR],
        "produces": ELEMENT, "handler": handlers["create"],
    })
    reg.register({
        "type": FUNCTION, "keywords": ["write"],
        "required": [STRING, ELEMENT], "handler": handlers["write"],
    })
    reg.register({
        "type": LOOP, "keywords": ["repeat"], "optional": [DIMENSION],
        "handler": lambda body, times: [body() for _ in range(times or 2)],
    })
    reg.register({
        "type": CONDITIONAL, "keywords": ["if"], "required": [COLOR],
        "predicate": lambda color: color == "red",
    })
    reg.register({"type": SHAPE, "keywords": ["circle"]})
    reg.register({"type": COLOR, "keywords": ["red"]})
    reg.register({"type": COLOR, "keywords": ["blue"]})
    reg.register({"type": DIMENSION, "keywords": ["thrice"], "value": 3})
    reg.register({"type": ELEMENT, "keywords": ["banner"]})
    reg.register({"type": STRING, "keywords": ["hello"]})
    return Compiler(reg)


@pytest.fixture
def host():
    return EventHost()


@pytest.fixture
def trigger(host):
    return ExecutionTrigger(host)


# ── Immediate execution ──────────────────────────────────────────

class TestRun:

    def test_function_runs_with_absent_optional(self, compiler, trigger, handlers):
        result = trigger.execute(compiler.compile(["create", "circle"]))
        handlers["create"].assert_called_once_with("circle", None)
        assert result == "circle-1"

    def test_child_result_feeds_parent(self, compiler, trigger, handlers):
        trigger.run(compiler.compile(["write", "hello", "create", "circle"]))
        handlers["create"].assert_called_once_with("circle", None)
        handlers["write"].assert_called_once_with("hello", "circle-1")

    def test_child_runs_before_parent(self, compiler, trigger, handlers):
        calls = []
        handlers["create"].side_effect = lambda *a: calls.append("create") or "circle-1"
        handlers["write"].side_effect = lambda *a: calls.append("write")
        trigger.run(compiler.compile(["write", "hello", "banner", "create", "circle"]))
        assert calls == ["create", "write"]
        handlers["write"].assert_called_once_with("hello", "banner")

    def test_loop_runs_body(self, compiler, trigger, handlers):
        trigger.run(compiler.compile(["repeat", "thrice", "create", "circle"]))
        assert handlers["create"].call_count == 3

    def test_loop_default_count(self, compiler, trigger, handlers):
        trigger.run(compiler.compile(["repeat", "create", "circle"]))
        assert handlers["create"].call_count == 2

    def test_conditional_true(self, compiler, trigger, handlers):
        assert trigger.run(compiler.compile(["if", "red", "create", "circle"])) == "circle-1"
        handlers["create"].assert_called_once()

    def test_conditional_false(self, compiler, trigger, handlers):
        assert trigger.run(compiler.compile(["if", "blue", "create", "circle"])) is None
        handlers["create"].assert_not_called()

    def test_empty_command_is_noop(self, trigger):
        assert trigger.execute(None) is None

    def test_refuses_missing_required(self, compiler, trigger, handlers):
        node = compiler.compile(["create", "circle"])
        node.filled[0] = False
        with pytest.raises(InvariantViolation):
            trigger.run(node)
        handlers["create"].assert_not_called()

    def test_handler_errors_propagate(self, compiler, trigger, handlers):
        handlers["create"].side_effect = RuntimeError("canvas gone")
        with pytest.raises(RuntimeError, match="canvas gone"):
            trigger.run(compiler.compile(["create", "circle"]))


# ── Event binding ────────────────────────────────────────────────

class TestBind:

    def test_event_defers_until_fired(self, compiler, trigger, host, document, handlers):
        node = compiler.compile(["load", "create", "circle"])
        subscription = trigger.execute(node)

        handlers["create"].assert_not_called()
        assert subscription.target is document
        assert subscription.signal == "load"

        assert host.fire(document, "load") == 1
        handlers["create"].assert_called_once_with("circle", None)

    def test_binding_survives_many_firings(self, compiler, trigger, host, document, handlers):
        trigger.execute(compiler.compile(["load", "create", "circle"]))
        host.fire(document, "load")
        host.fire(document, "load")
        assert handlers["create"].call_count == 2

    def test_unsubscribe(self, compiler, trigger, host, document, handlers):
        subscription = trigger.execute(compiler.compile(["load", "create", "circle"]))
        assert host.unsubscribe(subscription)
        assert host.fire(document, "load") == 0
        handlers["create"].assert_not_called()

    def test_unfired_binding_never_runs(self, compiler, trigger, host, handlers):
        trigger.execute(compiler.compile(["load", "create", "circle"]))
        host.fire("something-else", "load")
        handlers["create"].assert_not_called()

    def test_element_from_command(self, compiler, trigger, host, handlers):
        subscription = trigger.execute(compiler.compile(["click", "banner", "create", "circle"]))
        assert subscription.target == "banner"
        host.fire("banner", "click")
        handlers["create"].assert_called_once()

    def test_element_supplied_by_caller(self, compiler, trigger, host, handlers):
        subscription = trigger.execute(compiler.compile(["click", "create", "circle"]), element="sidebar")
        assert subscription.target == "sidebar"

    def test_missing_element(self, compiler, trigger, handlers):
        with pytest.raises(BindingError):
            trigger.execute(compiler.compile(["click", "create", "circle"]))

    def test_no_host(self, compiler):
        with pytest.raises(BindingError, match="host"):
            ExecutionTrigger().execute(compiler.compile(["load", "create", "circle"]))

    def test_event_inside_function_chain_binds(self, compiler, trigger, host, document, handlers):
        trigger.run(compiler.compile(["repeat", "load", "create", "circle"]))
        assert len(host.subscriptions("load")) == 2
        handlers["create"].assert_not_called()

    def test_custom_host_subscribe_called(self, compiler, document):
        host = MagicMock()
        ExecutionTrigger(host).execute(compiler.compile(["load", "create", "circle"]))
        target, signal, callback = host.subscribe.call_args.args
        assert target is document
        assert signal == "load"
        assert callable(callback)

    def test_bind_rejects_non_event(self, compiler, trigger):
        with pytest.raises(BindingError):
            trigger.bind(compiler.compile(["create", "circle"]))
