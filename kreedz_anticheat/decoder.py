"""Core decoding orchestration."""

import logging
import threading
from pathlib import Path
from typing import Self

from .config import DecoderProfile, load_default_profile, load_profile
from .grammars import Parser, compile_marker, extract_pattern_segment, load_grammar
from .models import JumpInput, PluginType
from .pattern import EMPTY_PATTERN, ScrollPattern

logger = logging.getLogger(__name__)


class ScrollDecoder:
    """Decodes raw ban stats text into scroll patterns using per-plugin grammars."""

    def __init__(self, profile: DecoderProfile | None = None) -> None:
        self._profile = profile or load_default_profile()
        self._segment_re = compile_marker(self._profile.extraction.marker)
        self._grammars: dict[PluginType, Parser] = {}
        self._load_configured_grammars()

    @classmethod
    def from_config(cls, path: str | Path) -> Self:
        """Create a decoder from a YAML config file."""
        profile = load_profile(path)
        return cls(profile=profile)

    def register_grammar(self, plugin_type: PluginType, parser: Parser) -> None:
        """Register a grammar parser programmatically."""
        if plugin_type is PluginType.UNKNOWN:
            raise ValueError("A grammar cannot be registered for the UNKNOWN plugin")
        self._grammars[plugin_type] = parser

    def has_grammar(self, plugin_type: PluginType) -> bool:
        return plugin_type in self._grammars

    def extract_segment(self, raw_stats: str) -> str | None:
        return extract_pattern_segment(raw_stats, self._segment_re)

    def parse_segment(self, segment: str, plugin_type: PluginType) -> tuple[JumpInput, ...]:
        """Run the grammar registered for a plugin over a captured segment."""
        parser = self._grammars.get(plugin_type)
        if parser is None:
            return ()

        try:
            jumps = parser(segment)
        except Exception:
            logger.exception("Grammar for %s failed on segment %r", plugin_type.value, segment)
            return ()
        return tuple(jumps or ())

    def decode(self, raw_stats: str, plugin_type: PluginType) -> ScrollPattern:
        """Decode raw stats text into a scroll pattern. Never raises on bad input."""
        segment = self.extract_segment(raw_stats)
        if segment is None:
            return EMPTY_PATTERN

        jumps = self.parse_segment(segment, plugin_type)
        if not jumps:
            return EMPTY_PATTERN
        return ScrollPattern(jumps)

    def _load_configured_grammars(self) -> None:
        """Load grammars declared in the profile."""
        for grammar_cfg in self._profile.grammars:
            func = load_grammar(grammar_cfg.parser)
            self._grammars[grammar_cfg.plugin] = func


_default_decoder: ScrollDecoder | None = None
_default_decoder_lock = threading.Lock()


def get_default_decoder() -> ScrollDecoder:
    """Return the shared decoder built from the default profile."""
    global _default_decoder
    if _default_decoder is None:
        with _default_decoder_lock:
            if _default_decoder is None:
                _default_decoder = ScrollDecoder()
    return _default_decoder
