"""Scroll-pattern extraction, per-plugin grammars and canonical formatters.

Every parser takes the captured segment (the text after ``Scroll pattern: ``)
and returns the jumps it could read. Parsers never raise on bad input: a token
that does not fit the plugin's grammar is dropped and parsing continues.
"""

import importlib
import logging
import re
from typing import Callable, Iterable

from .models import JumpInput

logger = logging.getLogger(__name__)

Parser = Callable[[str], list[JumpInput]]

DEFAULT_MARKER = "Scroll pattern: "

# Rendered by both formatters for a pattern without jumps.
NO_DATA = "N/A"

# Counts longer than this are treated as malformed tokens.
MAX_COUNT_DIGITS = 9

# GOKZ: "<pre>/<post>" with a trailing "*" on perfect jumps, e.g. "3/1*".
GOKZ_TOKEN_RE = re.compile(rf"([0-9]{{1,{MAX_COUNT_DIGITS}}})/([0-9]{{1,{MAX_COUNT_DIGITS}}})(\*?)")

# KZTimer: "<pre>-<post>", perfect jumps wrapped in brackets, e.g. "[3-1]".
KZTIMER_TOKEN_RE = re.compile(rf"(\[?)([0-9]{{1,{MAX_COUNT_DIGITS}}})-([0-9]{{1,{MAX_COUNT_DIGITS}}})(\]?)")


def compile_marker(marker: str = DEFAULT_MARKER) -> re.Pattern:
    """Build the extraction pattern for a marker.

    The segment runs from the end of the marker up to the next comma or the
    end of the line.
    """
    return re.compile(re.escape(marker) + r"([^,\r\n]*)")


SEGMENT_RE = compile_marker()


def extract_pattern_segment(raw_stats: str, pattern: re.Pattern = SEGMENT_RE) -> str | None:
    """Return the scroll-pattern segment of raw stats text, or None if absent."""
    if not raw_stats:
        return None
    m = pattern.search(raw_stats)
    if m is None:
        return None
    return m.group(1).strip()


def load_grammar(dotted_path: str) -> Parser:
    """Load a grammar parser from a dotted path.

    Supports two formats:
    - "module.path:function_name" (colon separator)
    - "module.path.function_name" (dot separator, last segment is the function)
    """
    if ":" in dotted_path:
        module_path, func_name = dotted_path.rsplit(":", 1)
    else:
        module_path, func_name = dotted_path.rsplit(".", 1)

    module = importlib.import_module(module_path)
    func = getattr(module, func_name)

    if not callable(func):
        raise TypeError(f"Grammar {dotted_path!r} is not callable")

    return func


def parse_nothing(segment: str) -> list[JumpInput]:
    """Grammar for plugins whose stats text cannot be decoded."""
    return []


def parse_gokz(segment: str) -> list[JumpInput]:
    """Parse a GOKZ scroll pattern such as ``3/1* 2/0 4/2*``."""
    jumps = []
    for token in segment.split():
        m = GOKZ_TOKEN_RE.fullmatch(token)
        if m is None:
            logger.debug("Dropping malformed GOKZ token %r", token)
            continue
        pre, post, perfect = m.groups()
        jumps.append(JumpInput(int(pre), int(post), perfect == "*"))
    return jumps


def parse_kztimer(segment: str) -> list[JumpInput]:
    """Parse a KZTimer scroll pattern such as ``[3-1] 2-0 [4-2]``."""
    jumps = []
    for token in segment.split():
        m = KZTIMER_TOKEN_RE.fullmatch(token)
        if m is None:
            logger.debug("Dropping malformed KZTimer token %r", token)
            continue
        opening, pre, post, closing = m.groups()
        # Half-bracketed tokens like "[3-1" are malformed
        if bool(opening) != bool(closing):
            logger.debug("Dropping unbalanced KZTimer token %r", token)
            continue
        jumps.append(JumpInput(int(pre), int(post), bool(opening)))
    return jumps


def format_gokz(jumps: Iterable[JumpInput]) -> str:
    """Render jumps in GOKZ notation. Inverse of :func:`parse_gokz`."""
    tokens = [
        f"{j.pre_input_count}/{j.post_input_count}{'*' if j.is_perfect else ''}"
        for j in jumps
    ]
    return " ".join(tokens) if tokens else NO_DATA


def format_kztimer(jumps: Iterable[JumpInput]) -> str:
    """Render jumps in KZTimer notation. Inverse of :func:`parse_kztimer`."""
    tokens = []
    for j in jumps:
        token = f"{j.pre_input_count}-{j.post_input_count}"
        tokens.append(f"[{token}]" if j.is_perfect else token)
    return " ".join(tokens) if tokens else NO_DATA
