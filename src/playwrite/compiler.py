"""
Command Compiler — tokens to a nested invocation chain

Works in two passes so that nothing is evaluated while the chain is built:

1. Left to right: resolve every token. Unknown words are filler and are
   dropped. Function, event, loop and conditional keywords open a node;
   value words (shapes, colors, ...) fill a slot of the most recently
   opened node that still has room for their type.
2. Right to left: fold the flat node list so that node[i + 1] becomes the
   child of node[i]. The first keyword of the sentence is the root, the
   last one is the innermost action.

Example:
    "when the page loads, create a red circle"

    load -- Event            (root, deferred)
    └── create -- Function   (child, runs when load fires)
          ├── circle -- Shape
          └── red -- Color
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .definitions import KeywordDefinition, Slot
from .errors import IncompleteCommandError, UnexpectedKeywordError
from .keywords import KeywordRegistry
from .script import tokenize
from .types import FUNCTION, INVOCABLE_TYPES, KeywordType

logger = logging.getLogger(__name__)


@dataclass
class CompiledNode:
    """One resolved keyword, its parameter values and the action nested inside it."""
    definition: KeywordDefinition
    values: List[Any]
    filled: List[bool]
    words: List[str] = field(default_factory=list)
    child: Optional["CompiledNode"] = None
    fed_slot: Optional[int] = None  # slot receiving the child's return value

    @classmethod
    def open(cls, definition: KeywordDefinition, word: str) -> "CompiledNode":
        arity = definition.arity
        return cls(definition=definition, values=[None] * arity, filled=[False] * arity, words=[word])

    @property
    def slots(self) -> tuple:
        return self.definition.slots

    @property
    def keyword(self) -> str:
        return self.definition.canonical_id

    def accept(self, keyword_type: KeywordType) -> Optional[int]:
        """Index of the first unfilled slot of ``keyword_type``, if any."""
        for index, slot in enumerate(self.slots):
            if slot.type is keyword_type and not self.filled[index] and index != self.fed_slot:
                return index
        return None

    def fill(self, index: int, value: Any, word: str) -> None:
        self.values[index] = value
        self.filled[index] = True
        self.words.append(word)

    def missing_required(self) -> Optional[Slot]:
        for index, slot in enumerate(self.slots):
            if slot.required and not self.filled[index] and index != self.fed_slot:
                return slot
        return None

    def chain(self) -> Iterator["CompiledNode"]:
        node: Optional[CompiledNode] = self
        while node is not None:
            yield node
            node = node.child

    def describe(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "type": self.definition.type.value,
            "params": [
                {
                    "type": slot.type.value,
                    "required": slot.required,
                    "value": self.values[index] if self.filled[index] else None,
                    "fed": index == self.fed_slot,
                }
                for index, slot in enumerate(self.slots)
            ],
            "child": self.child.describe() if self.child else None,
        }


class Compiler:
    def __init__(self, registry: KeywordRegistry) -> None:
        self._registry = registry

    def compile(self, tokens: Iterable[str]) -> Optional[CompiledNode]:
        """Compile one command. Returns None when it holds no keywords."""
        nodes = self._resolve(tokens)
        if not nodes:
            return None

        root = self._fold(nodes)

        for node in nodes:
            missing = node.missing_required()
            if missing is not None:
                raise IncompleteCommandError(node.keyword, missing.type)
        return root

    def compile_text(self, command: str) -> Optional[CompiledNode]:
        return self.compile(tokenize(command))

    def _resolve(self, tokens: Iterable[str]) -> List[CompiledNode]:
        nodes: List[CompiledNode] = []
        for token in tokens:
            entry = self._registry.resolve(token)
            if entry is None:
                logger.debug("Skipping filler word %r", token)
                continue

            definition = self._registry.definition_for(entry.canonical_id, entry.type)
            if entry.type in INVOCABLE_TYPES:
                nodes.append(CompiledNode.open(definition, token))
                continue

            # innermost open node wins
            for node in reversed(nodes):
                index = node.accept(entry.type)
                if index is not None:
                    node.fill(index, definition.value, token)
                    break
            else:
                raise UnexpectedKeywordError(token, entry.type)
        return nodes

    def _fold(self, nodes: List[CompiledNode]) -> CompiledNode:
        child: Optional[CompiledNode] = None
        for node in reversed(nodes):
            if child is not None:
                node.child = child
                produces = child.definition.produces
                if (
                    node.definition.type is FUNCTION
                    and child.definition.type is FUNCTION
                    and produces is not None
                ):
                    node.fed_slot = node.accept(produces)
            child = node
        return child
