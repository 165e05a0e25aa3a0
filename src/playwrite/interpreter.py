#!/usr/bin/env python3
"""
Playwrite Interpreter — Script to Actions

Runs a whole script one command at a time:

  script  → commands (split on the delimiter)
  command → words    (lower-cased, punctuation dropped)
  words   → compiled chain (unknown words skipped as filler)
  chain   → run now (functions, loops, conditionals) or bind (events)

A command that fails to compile or bind is logged and skipped; the commands
around it still run. Exceptions raised by handlers are not caught here.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .compiler import CompiledNode, Compiler
from .config import PlaywriteConfig, default_config
from .errors import BindingError, CompilationError
from .keywords import KeywordRegistry
from .observability import CommandRecord
from .script import commandize, tokenize
from .trigger import ExecutionTrigger
from .types import EVENT

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one command."""
    index: int
    command: str
    tokens: List[str]
    status: str  # "ran", "bound", "empty", "failed"
    node: Optional[CompiledNode] = None
    outcome: Any = None
    error: Optional[Exception] = None
    keywords: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    def to_record(self) -> CommandRecord:
        return CommandRecord(
            index=self.index,
            command=self.command,
            tokens=self.tokens,
            keywords=self.keywords,
            skipped=self.skipped,
            status=self.status,
            root_type=self.node.definition.type.value if self.node else None,
            error=str(self.error) if self.error else None,
        )


class Interpreter:
    def __init__(
        self,
        registry: KeywordRegistry,
        trigger: ExecutionTrigger,
        config: Optional[PlaywriteConfig] = None,
    ) -> None:
        self.registry = registry
        self.trigger = trigger
        self.config = config or default_config()
        self.compiler = Compiler(registry)

    def run_script(self, script: str) -> List[CommandResult]:
        commands = commandize(script, self.config.command_delimiter)
        results = [self.run_command(command, index) for index, command in enumerate(commands)]
        failed = sum(1 for result in results if not result.ok)
        if failed:
            logger.warning("%d of %d commands failed", failed, len(results))
        return results

    def run_command(self, command: str, index: int = 0) -> CommandResult:
        tokens = tokenize(command)
        keywords = [token for token in tokens if token in self.registry]
        skipped = [token for token in tokens if token not in self.registry]

        node = None
        try:
            node = self.compiler.compile(tokens)
            outcome = self.trigger.execute(node)
        except (CompilationError, BindingError) as exc:
            if self.config.stop_on_error:
                raise
            logger.warning("Command %d not run (%r): %s", index, command, exc)
            result = CommandResult(
                index=index, command=command, tokens=tokens, status="failed",
                node=node, error=exc, keywords=keywords, skipped=skipped,
            )
        else:
            if node is None:
                status = "empty"
            elif node.definition.type is EVENT:
                status = "bound"
            else:
                status = "ran"
            result = CommandResult(
                index=index, command=command, tokens=tokens, status=status,
                node=node, outcome=outcome, keywords=keywords, skipped=skipped,
            )

        if self.config.log_records:
            logger.info(json.dumps(result.to_record().to_dict()))
        return result
