"""Execution trigger: run compiled chains now or bind them to host events."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .compiler import CompiledNode
from .errors import BindingError, InvariantViolation
from .types import CONDITIONAL, EVENT, FUNCTION, LOOP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subscription:
    id: int
    target: Any
    signal: str
    callback: Callable[..., Any]


class EventHost:
    """
    In-process subscription mechanism.

    Bindings stay registered until unsubscribed; firing a signal calls every
    matching callback, every time.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[int, Subscription] = {}
        self._ids = itertools.count(1)

    def subscribe(self, target: Any, signal: str, callback: Callable[..., Any]) -> Subscription:
        subscription = Subscription(next(self._ids), target, signal, callback)
        self._subscriptions[subscription.id] = subscription
        logger.debug("Subscribed #%d to %s on %r", subscription.id, signal, target)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        return self._subscriptions.pop(subscription.id, None) is not None

    def subscriptions(self, signal: Optional[str] = None) -> List[Subscription]:
        return [
            s for s in self._subscriptions.values()
            if signal is None or s.signal == signal
        ]

    def fire(self, target: Any, signal: str, *args: Any) -> int:
        """Fire ``signal`` on ``target``. Returns the number of callbacks run."""
        matching = [
            s for s in self._subscriptions.values()
            if s.signal == signal and (s.target is target or s.target == target)
        ]
        for subscription in matching:
            subscription.callback(*args)
        return len(matching)


class ExecutionTrigger:
    def __init__(self, host: Any = None) -> None:
        self._host = host

    def execute(self, node: Optional[CompiledNode], element: Any = None) -> Any:
        """Bind event roots, run everything else. ``None`` is a no-op."""
        if node is None:
            return None
        if node.definition.type is EVENT:
            return self.bind(node, element)
        return self.run(node)

    def run(self, node: CompiledNode) -> Any:
        definition = node.definition
        kind = definition.type

        if kind is FUNCTION:
            values = list(node.values)
            if node.child is not None:
                result = self.run(node.child)
                if node.fed_slot is not None:
                    values[node.fed_slot] = result
            self._check_required(node)
            logger.debug("Calling %s with %r", definition.canonical_id, values)
            return definition.handler(*values)

        if kind is LOOP:
            self._check_required(node)
            return definition.handler(self._body(node), *node.values)

        if kind is CONDITIONAL:
            self._check_required(node)
            if definition.predicate(*node.values):
                return self._run_child(node)
            logger.debug("Condition %s not met", definition.canonical_id)
            return None

        if kind is EVENT:
            return self.bind(node)

        raise InvariantViolation(f"cannot run a {kind.value} node")

    def bind(self, node: CompiledNode, element: Any = None) -> Any:
        definition = node.definition
        if definition.type is not EVENT:
            raise BindingError(f'"{definition.canonical_id}" is not an event')

        if definition.requires_element:
            target = node.values[0] if node.filled[0] else element
        else:
            target = definition.bind_to
        if target is None:
            raise BindingError(f'no element to bind "{definition.canonical_id}" to')
        if self._host is None:
            raise BindingError("no event host configured")

        logger.debug("Binding %s to %r", definition.signal_name, target)
        return self._host.subscribe(target, definition.signal_name, self._body(node))

    def _body(self, node: CompiledNode) -> Callable[..., Any]:
        def body(*_args: Any) -> Any:
            return self._run_child(node)
        return body

    def _run_child(self, node: CompiledNode) -> Any:
        if node.child is None:
            return None
        return self.run(node.child)

    @staticmethod
    def _check_required(node: CompiledNode) -> None:
        missing = node.missing_required()
        if missing is not None:
            raise InvariantViolation(
                f'"{node.keyword}" reached execution without its {missing.type.value} parameter'
            )
