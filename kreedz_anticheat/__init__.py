"""kreedz-anticheat: Decode scroll patterns from KZ anti-cheat ban stats."""

from .ban import BanRecord, BanStats
from .decoder import ScrollDecoder, get_default_decoder
from .models import BanType, JumpInput, PatternStats, PatternSummary, PluginType
from .pattern import ScrollPattern
from .stats import summarize

__all__ = [
    "BanRecord",
    "BanStats",
    "BanType",
    "JumpInput",
    "PatternStats",
    "PatternSummary",
    "PluginType",
    "ScrollDecoder",
    "ScrollPattern",
    "get_default_decoder",
    "summarize",
]
