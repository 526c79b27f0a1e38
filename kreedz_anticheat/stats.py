"""Summary statistics over decoded ban stats."""

import statistics
from typing import Iterable

from .ban import BanStats
from .models import PatternSummary

HISTOGRAM_BUCKETS = ["<50%", "50-69%", "70-84%", "85-94%", ">=95%"]


def summarize(stats_list: Iterable[BanStats]) -> PatternSummary:
    """Compute aggregate statistics over a collection of ban stats."""
    stats_list = list(stats_list)
    decoded = [s for s in stats_list if s.total_jump_count > 0]

    if not decoded:
        return PatternSummary(
            total_bans=len(stats_list),
            bans_with_pattern=0,
            total_jumps=0,
            total_perfect_jumps=0,
            overall_perfect_ratio=0.0,
            mean_perfect_ratio=0.0,
            median_perfect_ratio=0.0,
            perfect_ratio_histogram={b: 0 for b in HISTOGRAM_BUCKETS},
        )

    ratios = [s.perfect_jump_ratio for s in decoded]
    total_jumps = sum(s.total_jump_count for s in decoded)
    total_perfect = sum(s.perfect_jump_count for s in decoded)

    return PatternSummary(
        total_bans=len(stats_list),
        bans_with_pattern=len(decoded),
        total_jumps=total_jumps,
        total_perfect_jumps=total_perfect,
        overall_perfect_ratio=round(total_perfect / total_jumps, 3),
        mean_perfect_ratio=round(statistics.mean(ratios), 3),
        median_perfect_ratio=round(statistics.median(ratios), 3),
        perfect_ratio_histogram=_build_histogram(ratios),
    )


def _build_histogram(ratios: list[float]) -> dict[str, int]:
    """Bucket perfect-jump ratios into a histogram."""
    buckets = {b: 0 for b in HISTOGRAM_BUCKETS}
    for r in ratios:
        if r < 0.5:
            buckets["<50%"] += 1
        elif r < 0.7:
            buckets["50-69%"] += 1
        elif r < 0.85:
            buckets["70-84%"] += 1
        elif r < 0.95:
            buckets["85-94%"] += 1
        else:
            buckets[">=95%"] += 1
    return buckets
