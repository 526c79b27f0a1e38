"""Tests for summary statistics."""

from kreedz_anticheat import BanStats, PluginType, summarize
from kreedz_anticheat.stats import HISTOGRAM_BUCKETS


def _gokz(pattern: str) -> BanStats:
    return BanStats(f"Scroll pattern: {pattern}", PluginType.GOKZ)


class TestSummarize:
    def test_empty(self):
        summary = summarize([])
        assert summary.total_bans == 0
        assert summary.bans_with_pattern == 0
        assert summary.overall_perfect_ratio == 0.0
        assert summary.perfect_ratio_histogram == {b: 0 for b in HISTOGRAM_BUCKETS}

    def test_only_undecodable(self):
        summary = summarize([BanStats("banned for macro usage"), BanStats()])
        assert summary.total_bans == 2
        assert summary.bans_with_pattern == 0
        assert summary.mean_perfect_ratio == 0.0

    def test_mixed(self):
        summary = summarize([
            _gokz("1/1* 1/1* 1/1* 1/1"),  # 0.75
            _gokz("1/1* 1/1"),  # 0.5
            _gokz("1/1*"),  # 1.0
            BanStats("no pattern here"),
        ])
        assert summary.total_bans == 4
        assert summary.bans_with_pattern == 3
        assert summary.total_jumps == 7
        assert summary.total_perfect_jumps == 5
        assert summary.overall_perfect_ratio == round(5 / 7, 3)
        assert summary.mean_perfect_ratio == 0.75
        assert summary.median_perfect_ratio == 0.75
        assert summary.perfect_ratio_histogram == {
            "<50%": 0,
            "50-69%": 1,
            "70-84%": 1,
            "85-94%": 0,
            ">=95%": 1,
        }

    def test_accepts_generator(self):
        summary = summarize(_gokz("0/0") for _ in range(3))
        assert summary.total_bans == 3
        assert summary.perfect_ratio_histogram["<50%"] == 3
