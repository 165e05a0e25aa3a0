"""
Playwrite — plain-sentence command interpreter

Provides:
- Keyword types (KeywordType) — the closed set of word categories
- Keyword Registry (KeywordRegistry) — word index + definition library
- Compiler (Compiler) — words to a nested invocation chain
- Execution Trigger (ExecutionTrigger) — run chains or bind them to events
- Interpreter (Interpreter) — whole scripts, one isolated command at a time
"""

from .types import KeywordType
from .definitions import KeywordDefinition, IndexEntry, Slot
from .errors import (
    PlaywriteError, RegistrationError, DuplicateKeywordError,
    EmptyKeywordListError, MissingTypeError, UnsupportedTypeError,
    InvalidDefinitionError, CatalogError, CompilationError,
    IncompleteCommandError, UnexpectedKeywordError, InvariantViolation,
    UnknownKeywordError, BindingError,
)
from .keywords import KeywordRegistry
from .compiler import Compiler, CompiledNode
from .trigger import ExecutionTrigger, EventHost, Subscription
from .interpreter import Interpreter, CommandResult
from .config import PlaywriteConfig, load_config

__all__ = [
    'KeywordType', 'KeywordDefinition', 'IndexEntry', 'Slot',
    'PlaywriteError', 'RegistrationError', 'DuplicateKeywordError',
    'EmptyKeywordListError', 'MissingTypeError', 'UnsupportedTypeError',
    'InvalidDefinitionError', 'CatalogError', 'CompilationError',
    'IncompleteCommandError', 'UnexpectedKeywordError', 'InvariantViolation',
    'UnknownKeywordError', 'BindingError',
    'KeywordRegistry',
    'Compiler', 'CompiledNode',
    'ExecutionTrigger', 'EventHost', 'Subscription',
    'Interpreter', 'CommandResult',
    'PlaywriteConfig', 'load_config',
]
