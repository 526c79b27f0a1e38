"""Ban stats entity and the ban record that carries it."""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .decoder import ScrollDecoder, get_default_decoder
from .models import BanType, JumpInput, PluginType
from .pattern import ScrollPattern


@dataclass(frozen=True)
class BanStats:
    """Anti-cheat stats text attached to a ban, with its decoded scroll pattern.

    Identity is ``(raw_stats, plugin_type)``. The scroll pattern is decoded on
    first access, at most once per instance, and cached from then on.
    """

    raw_stats: str = ""
    plugin_type: PluginType = PluginType.UNKNOWN
    decoder: ScrollDecoder | None = field(default=None, repr=False, compare=False)
    _pattern: ScrollPattern | None = field(default=None, init=False, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        raw_stats = str(self.raw_stats).strip() if self.raw_stats is not None else ""
        plugin_type = self.plugin_type
        if not isinstance(plugin_type, PluginType):
            plugin_type = PluginType.from_api_name(plugin_type)

        object.__setattr__(self, "raw_stats", raw_stats)
        object.__setattr__(self, "plugin_type", plugin_type)

    def __getstate__(self) -> dict:
        # The decoder is process-local configuration
        return {"raw_stats": self.raw_stats, "plugin_type": self.plugin_type}

    def __setstate__(self, state: dict) -> None:
        object.__setattr__(self, "raw_stats", state["raw_stats"])
        object.__setattr__(self, "plugin_type", state["plugin_type"])
        object.__setattr__(self, "decoder", None)
        object.__setattr__(self, "_pattern", None)
        object.__setattr__(self, "_lock", threading.Lock())

    @property
    def scroll_pattern(self) -> ScrollPattern:
        """The decoded scroll pattern, computed on first access."""
        pattern = self._pattern
        if pattern is not None:
            return pattern

        with self._lock:
            if self._pattern is None:
                decoder = self.decoder or get_default_decoder()
                object.__setattr__(self, "_pattern", decoder.decode(self.raw_stats, self.plugin_type))
            return self._pattern

    def is_empty(self) -> bool:
        """True if there is no stats text at all."""
        return not self.raw_stats

    @property
    def jump_inputs(self) -> tuple[JumpInput, ...]:
        return self.scroll_pattern.jumps

    @property
    def total_jump_count(self) -> int:
        return self.scroll_pattern.total_jump_count

    @property
    def perfect_jump_count(self) -> int:
        return self.scroll_pattern.perfect_jump_count

    @property
    def perfect_jump_ratio(self) -> float:
        return self.scroll_pattern.perfect_jump_ratio

    @property
    def total_pre_input_count(self) -> int:
        return self.scroll_pattern.total_pre_input_count

    @property
    def total_post_input_count(self) -> int:
        return self.scroll_pattern.total_post_input_count

    @property
    def total_input_count(self) -> int:
        return self.scroll_pattern.total_input_count

    @property
    def avg_pre_input_count(self) -> float:
        return self.scroll_pattern.avg_pre_input_count

    @property
    def avg_post_input_count(self) -> float:
        return self.scroll_pattern.avg_post_input_count

    @property
    def avg_total_input_count(self) -> float:
        return self.scroll_pattern.avg_total_input_count

    def to_gokz_string(self) -> str:
        return self.scroll_pattern.to_gokz_string()

    def to_kztimer_string(self) -> str:
        return self.scroll_pattern.to_kztimer_string()


@dataclass(frozen=True)
class BanRecord:
    """A ban as returned by the API, reduced to the fields the decoder needs."""

    id: int | None
    ban_type: BanType
    steam_id64: str | None
    notes: str
    stats: BanStats
    server_id: int | None = None
    created_on: datetime | None = None
    expires_on: datetime | None = None
    updated_on: datetime | None = None

    @classmethod
    def from_api(
        cls,
        data: dict[str, Any],
        plugin_type: PluginType | str | None = None,
        decoder: ScrollDecoder | None = None,
    ) -> "BanRecord":
        """Build a record from an API ban object.

        The plugin tag comes from ``plugin_type`` when given, then from an
        optional ``"plugin"`` key, and is UNKNOWN otherwise.
        """
        if plugin_type is None:
            plugin_type = data.get("plugin")

        return cls(
            id=_int_or_none(data.get("id")),
            ban_type=BanType.from_api_name(data.get("ban_type")),
            steam_id64=str(data["steamid64"]) if data.get("steamid64") is not None else None,
            notes=(data.get("notes") or "").strip(),
            stats=BanStats(data.get("stats"), plugin_type, decoder=decoder),
            server_id=_int_or_none(data.get("server_id")),
            created_on=_parse_datetime(data.get("created_on")),
            expires_on=_parse_datetime(data.get("expires_on")),
            updated_on=_parse_datetime(data.get("updated_on")),
        )


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def _parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp from the API."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except (ValueError, TypeError):
        return None
