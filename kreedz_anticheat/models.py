"""Data models for kreedz-anticheat."""

from dataclasses import dataclass, field
from enum import Enum


class PluginType(str, Enum):
    """Anti-cheat plugin that authored a ban's stats text."""

    GOKZ = "GOKZ"
    KZTIMER = "KZTIMER"
    SIMPLEKZ = "SIMPLEKZ"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_api_name(cls, name: str | None) -> "PluginType":
        """Look up a plugin by name, case-insensitively. Falls back to UNKNOWN."""
        if not name:
            return cls.UNKNOWN
        return cls.__members__.get(name.strip().upper(), cls.UNKNOWN)


class BanType(str, Enum):
    """Ban type as named by the API."""

    BHOP_HACK = "bhop_hack"
    BHOP_MACRO = "bhop_macro"
    STRAFE_HACK = "strafe_hack"
    STRAFE_MACRO = "strafe_macro"
    BAN_EVASION = "ban_evasion"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def from_api_name(cls, name: str | None) -> "BanType":
        if not name:
            return cls.UNKNOWN
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class JumpInput:
    """Scroll inputs recorded around a single jump."""

    pre_input_count: int
    post_input_count: int
    is_perfect: bool = False

    def __post_init__(self) -> None:
        if self.pre_input_count < 0 or self.post_input_count < 0:
            raise ValueError(
                f"Input counts must be non-negative, got "
                f"pre={self.pre_input_count} post={self.post_input_count}"
            )

    @property
    def total_input_count(self) -> int:
        return self.pre_input_count + self.post_input_count


@dataclass(frozen=True)
class PatternStats:
    """Aggregate statistics derived from one scroll pattern."""

    total_jump_count: int
    perfect_jump_count: int
    perfect_jump_ratio: float
    total_pre_input_count: int
    total_post_input_count: int
    total_input_count: int
    avg_pre_input_count: float
    avg_post_input_count: float
    avg_total_input_count: float


@dataclass
class PatternSummary:
    """Aggregate statistics over a collection of decoded bans."""

    total_bans: int
    bans_with_pattern: int
    total_jumps: int
    total_perfect_jumps: int
    overall_perfect_ratio: float
    mean_perfect_ratio: float
    median_perfect_ratio: float
    perfect_ratio_histogram: dict[str, int] = field(default_factory=dict)
