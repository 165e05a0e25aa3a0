"""Exception taxonomy.

Registration errors are raised while the keyword catalog is being built and
should stop start-up. Compilation errors abort a single command. Invariant
violations mean the registry itself is inconsistent.
"""

from __future__ import annotations

from typing import Any


class PlaywriteError(Exception):
    """Base class for every error raised by playwrite."""


# ── Registration ────────────────────────────────────────────────

class RegistrationError(PlaywriteError):
    pass


class DuplicateKeywordError(RegistrationError):
    def __init__(self, word: str) -> None:
        super().__init__(f'keyword "{word}" already exists')
        self.word = word


class EmptyKeywordListError(RegistrationError):
    def __init__(self) -> None:
        super().__init__("no keywords given for definition")


class MissingTypeError(RegistrationError):
    def __init__(self, keywords: Any = None) -> None:
        super().__init__(f"no type given for keyword(s): {keywords!r}")
        self.keywords = keywords


class UnsupportedTypeError(RegistrationError):
    def __init__(self, keyword_type: Any) -> None:
        super().__init__(f"type not supported: {keyword_type!r}")
        self.keyword_type = keyword_type


class InvalidDefinitionError(RegistrationError):
    pass


class CatalogError(RegistrationError):
    """A keyword catalog file does not match its schema."""


# ── Compilation ─────────────────────────────────────────────────

class CompilationError(PlaywriteError):
    pass


class IncompleteCommandError(CompilationError):
    def __init__(self, canonical_id: str, missing_type: Any) -> None:
        super().__init__(
            f'"{canonical_id}" is missing a required {missing_type.value} parameter'
        )
        self.canonical_id = canonical_id
        self.missing_type = missing_type


class UnexpectedKeywordError(CompilationError):
    def __init__(self, word: str, keyword_type: Any) -> None:
        super().__init__(
            f'"{word}" ({keyword_type.value}) does not fit any open parameter'
        )
        self.word = word
        self.keyword_type = keyword_type


# ── Internal consistency ────────────────────────────────────────

class InvariantViolation(PlaywriteError):
    pass


class UnknownKeywordError(InvariantViolation):
    def __init__(self, canonical_id: str, keyword_type: Any) -> None:
        super().__init__(
            f'no {keyword_type.value} definition for "{canonical_id}"'
        )
        self.canonical_id = canonical_id
        self.keyword_type = keyword_type


# ── Execution ───────────────────────────────────────────────────

class BindingError(PlaywriteError):
    """An event node has nothing to bind to."""
