"""Script front end: split text into commands and commands into words."""

from __future__ import annotations

import re
from typing import List

_PUNCTUATION = re.compile(r"[^\w\s#'-]")


def commandize(script: str, delimiter: str = ".") -> List[str]:
    """Split a script into commands, dropping empty ones."""
    return [command.strip() for command in script.split(delimiter) if command.strip()]


def tokenize(command: str) -> List[str]:
    """Lower-case a command and split it into words.

    Punctuation is dropped except for characters that can sit inside a word
    (hex colors, hyphenated and contracted words).
    """
    cleaned = _PUNCTUATION.sub(" ", command.lower())
    words = (word.strip("'-") for word in cleaned.split())
    return [word for word in words if word]
