"""Decoded scroll pattern and its memoized statistics."""

import threading
from dataclasses import dataclass, field
from typing import Iterable

from .grammars import format_gokz, format_kztimer
from .models import JumpInput, PatternStats


@dataclass(frozen=True)
class ScrollPattern:
    """Ordered, immutable sequence of jump inputs in detection order.

    Statistics are computed once on first access and cached for the lifetime
    of the instance. The cache and its lock do not take part in equality.
    """

    jumps: tuple[JumpInput, ...] = ()
    _stats: PatternStats | None = field(default=None, init=False, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.jumps, tuple):
            object.__setattr__(self, "jumps", tuple(self.jumps))

    @classmethod
    def of(cls, jumps: Iterable[JumpInput] | None) -> "ScrollPattern":
        return cls(tuple(jumps) if jumps is not None else ())

    def __getstate__(self) -> dict:
        return {"jumps": self.jumps}

    def __setstate__(self, state: dict) -> None:
        object.__setattr__(self, "jumps", state["jumps"])
        object.__setattr__(self, "_stats", None)
        object.__setattr__(self, "_lock", threading.Lock())

    @property
    def stats(self) -> PatternStats:
        """Aggregate statistics, computed on first access."""
        stats = self._stats
        if stats is not None:
            return stats

        with self._lock:
            if self._stats is None:
                object.__setattr__(self, "_stats", _compute_stats(self.jumps))
            return self._stats

    def is_empty(self) -> bool:
        return not self.jumps

    @property
    def total_jump_count(self) -> int:
        return self.stats.total_jump_count

    @property
    def perfect_jump_count(self) -> int:
        return self.stats.perfect_jump_count

    @property
    def perfect_jump_ratio(self) -> float:
        return self.stats.perfect_jump_ratio

    @property
    def total_pre_input_count(self) -> int:
        return self.stats.total_pre_input_count

    @property
    def total_post_input_count(self) -> int:
        return self.stats.total_post_input_count

    @property
    def total_input_count(self) -> int:
        return self.stats.total_input_count

    @property
    def avg_pre_input_count(self) -> float:
        return self.stats.avg_pre_input_count

    @property
    def avg_post_input_count(self) -> float:
        return self.stats.avg_post_input_count

    @property
    def avg_total_input_count(self) -> float:
        return self.stats.avg_total_input_count

    def to_gokz_string(self) -> str:
        """Render the jumps in GOKZ notation, e.g. ``3/1* 2/0``."""
        return format_gokz(self.jumps)

    def to_kztimer_string(self) -> str:
        """Render the jumps in KZTimer notation, e.g. ``[3-1] 2-0``."""
        return format_kztimer(self.jumps)


EMPTY_PATTERN = ScrollPattern()


def _compute_stats(jumps: tuple[JumpInput, ...]) -> PatternStats:
    """Fold a jump sequence into its aggregate statistics."""
    total = len(jumps)
    perfect = sum(1 for j in jumps if j.is_perfect)
    pre = sum(j.pre_input_count for j in jumps)
    post = sum(j.post_input_count for j in jumps)

    return PatternStats(
        total_jump_count=total,
        perfect_jump_count=perfect,
        perfect_jump_ratio=_ratio(perfect, total),
        total_pre_input_count=pre,
        total_post_input_count=post,
        total_input_count=pre + post,
        avg_pre_input_count=_ratio(pre, total),
        avg_post_input_count=_ratio(post, total),
        avg_total_input_count=_ratio(pre + post, total),
    )


def _ratio(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator
