"""Tolerant parsing of JSON returned by the extraction service.

Strategies are tried in order and the first one that yields JSON wins:
the raw text, the text with Markdown code fences removed, and the first
balanced ``[...]`` or ``{...}`` substring.
"""

import json
import re
from collections.abc import Callable

from filemorph.extraction.exceptions import MalformedResponseError
from filemorph.logging.logger import Log

_FENCE_RE = re.compile(r"```[a-zA-Z]*\n?|```")
_OPENING_RE = re.compile(r"[\[{]")
_CLOSING = {"[": "]", "{": "}"}


def _parse_direct(text: str) -> object:
    return json.loads(text)


def _parse_without_fences(text: str) -> object:
    return json.loads(_FENCE_RE.sub("", text).strip())


def _parse_balanced_substring(text: str) -> object:
    for match in _OPENING_RE.finditer(text):
        end = _find_balanced_end(text, match.start())
        if end is None:
            continue
        try:
            return json.loads(text[match.start() : end + 1])
        except json.JSONDecodeError:
            continue
    raise ValueError("no balanced JSON substring")


def _find_balanced_end(text: str, start: int) -> int | None:
    """Return the index closing the bracket at `start`, skipping string literals."""
    stack = [_CLOSING[text[start]]]
    in_string = False
    escaped = False
    for pos in range(start + 1, len(text)):
        char = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in _CLOSING:
            stack.append(_CLOSING[char])
        elif char in "]}":
            if char != stack.pop():
                return None
            if not stack:
                return pos
    return None


REPAIR_CHAIN: tuple[Callable[[str], object], ...] = (
    _parse_direct,
    _parse_without_fences,
    _parse_balanced_substring,
)


def parse_response(text: str) -> object:
    """Parse service output as JSON, repairing common formatting noise.

    Raises:
        MalformedResponseError: if every strategy fails.
    """
    for strategy in REPAIR_CHAIN:
        try:
            return strategy(text)
        except ValueError:
            continue
    Log.error(f"Could not parse AI response as JSON:\n{text}")
    raise MalformedResponseError("The AI response was malformed. Please try again.")
