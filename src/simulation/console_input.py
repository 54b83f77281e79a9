"""Interactive input for the command line runner.

Both readers take a `prompt` callable with the same shape as the builtin
`input` so tests can script the answers.
"""
from typing import Callable, List, Optional

import structlog

logger = structlog.get_logger(__name__)

STOP_WORD = "RUN"

Prompt = Callable[[str], str]


def read_capacity(prompt: Optional[Prompt] = None, default: int = 4) -> int:
    """Ask for the cache capacity until an integer is given.

    End of input falls back to `default`.
    """
    prompt = prompt or input
    message = "Enter the cache capacity (e.g., 4): "
    while True:
        try:
            raw = prompt(message)
        except EOFError:
            return default
        raw = raw.strip()
        try:
            return int(raw)
        except ValueError:
            logger.warning("invalid_capacity", value=raw)
            message = "Invalid input. Please enter a number: "


def read_access_sequence(prompt: Optional[Prompt] = None) -> List[str]:
    """Collect keys one per line until RUN (any case) or end of input.

    Blank lines are skipped and surrounding whitespace is trimmed.
    """
    prompt = prompt or input
    keys: List[str] = []
    while True:
        try:
            line = prompt("> ")
        except EOFError:
            break
        key = line.strip()
        if key.upper() == STOP_WORD:
            break
        if not key:
            continue
        keys.append(key)
    return keys
