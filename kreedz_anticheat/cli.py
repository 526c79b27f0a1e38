"""CLI entry point for kreedz-anticheat."""

import argparse
import csv
import io
import json
import logging
import sys
from pathlib import Path

from .ban import BanRecord, BanStats
from .decoder import ScrollDecoder
from .models import PluginType
from .stats import summarize

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "id", "ban_type", "plugin_type", "total_jump_count", "perfect_jump_count",
    "perfect_jump_ratio", "avg_pre_input_count", "avg_post_input_count",
    "avg_total_input_count",
]


def main(argv: list[str] | None = None) -> None:
    """KZ anti-cheat stats decoder. Reads API ban objects and reports scroll patterns."""
    parser = argparse.ArgumentParser(
        prog="kreedz-anticheat",
        description="Decode scroll patterns from KZ anti-cheat ban stats.",
    )
    parser.add_argument("bans_file", nargs="?", default=None, help="Path to a JSON file with a list of API ban objects.")
    parser.add_argument("--raw", dest="raw_stats", default=None, help="Decode a single raw stats string.")
    parser.add_argument("--plugin", default=None, choices=[p.value for p in PluginType], type=str.upper, help="Plugin that wrote the stats (for --raw, or bans without one).")
    parser.add_argument("--config", dest="config_path", default=None, help="Path to custom YAML decoder profile.")
    parser.add_argument("--format", dest="output_format", choices=["json", "csv"], default="json", help="Output format (default: json).")
    parser.add_argument("--output", dest="output_path", default=None, help="Write results to file instead of stdout.")
    parser.add_argument("--summary", dest="show_summary", action="store_true", default=False, help="Print summary statistics to stderr.")
    parser.add_argument("--min-ratio", type=float, default=None, help="Only output bans with perfect-jump ratio >= n.")
    parser.add_argument("--verbose", action="store_true", default=False, help="Include per-jump data and formatted patterns in output.")
    parser.add_argument("--debug", action="store_true", default=False, help="Enable debug logging.")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.raw_stats is None and args.bans_file is None:
        parser.print_help()
        sys.exit(1)

    _cmd_decode(args)


def _cmd_decode(args: argparse.Namespace) -> None:
    """Execute decoding."""
    if args.config_path:
        if not Path(args.config_path).is_file():
            print(f"Error: Config file not found: {args.config_path}", file=sys.stderr)
            sys.exit(2)
        decoder = ScrollDecoder.from_config(args.config_path)
    else:
        decoder = ScrollDecoder()

    if args.raw_stats is not None:
        stats = BanStats(args.raw_stats, args.plugin, decoder=decoder)
        _print_inline_result(stats)
        return

    if not Path(args.bans_file).is_file():
        print(f"Error: File not found: {args.bans_file}", file=sys.stderr)
        sys.exit(2)

    with open(args.bans_file, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]

    records = [BanRecord.from_api(item, _record_plugin(item, args.plugin), decoder=decoder) for item in data]
    logger.debug("Loaded %d ban records from %s", len(records), args.bans_file)

    if args.min_ratio is not None:
        records = [r for r in records if r.stats.perfect_jump_ratio >= args.min_ratio]

    if args.output_format == "json":
        output_text = _format_json(records, args.verbose)
    else:
        output_text = _format_csv(records)

    if args.output_path:
        with open(args.output_path, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        print(output_text)

    if args.show_summary:
        _print_summary(summarize(r.stats for r in records))


def _record_plugin(item: dict, fallback: str | None) -> str | None:
    """Plugin tag for a record: its own ``plugin`` key wins over the CLI flag."""
    return item.get("plugin") or fallback


def _print_inline_result(stats: BanStats) -> None:
    """Print a human-readable breakdown for a single raw stats string."""
    print(f"Plugin:        {stats.plugin_type.value}")
    print(f"Jumps:         {stats.total_jump_count}")
    print(f"Perfect jumps: {stats.perfect_jump_count} ({stats.perfect_jump_ratio:.1%})")
    print(f"Avg pre/post:  {stats.avg_pre_input_count:.2f} / {stats.avg_post_input_count:.2f}")
    print(f"GOKZ:          {stats.to_gokz_string()}")
    print(f"KZTimer:       {stats.to_kztimer_string()}")


def _record_row(record: BanRecord) -> dict:
    s = record.stats
    return {
        "id": record.id,
        "ban_type": record.ban_type.value,
        "plugin_type": s.plugin_type.value,
        "total_jump_count": s.total_jump_count,
        "perfect_jump_count": s.perfect_jump_count,
        "perfect_jump_ratio": round(s.perfect_jump_ratio, 4),
        "avg_pre_input_count": round(s.avg_pre_input_count, 4),
        "avg_post_input_count": round(s.avg_post_input_count, 4),
        "avg_total_input_count": round(s.avg_total_input_count, 4),
    }


def _format_json(records: list[BanRecord], verbose: bool) -> str:
    """Format results as JSON."""
    rows = []
    for r in records:
        row = _record_row(r)
        if verbose:
            row["jumps"] = [
                {
                    "pre": j.pre_input_count,
                    "post": j.post_input_count,
                    "perfect": j.is_perfect,
                }
                for j in r.stats.jump_inputs
            ]
            row["gokz"] = r.stats.to_gokz_string()
            row["kztimer"] = r.stats.to_kztimer_string()
        rows.append(row)
    return json.dumps(rows, indent=2)


def _format_csv(records: list[BanRecord]) -> str:
    """Format results as CSV."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for r in records:
        writer.writerow(_record_row(r))
    return buf.getvalue()


def _print_summary(summary) -> None:
    """Print summary statistics to stderr."""
    print("\n=== Scroll Pattern Summary ===", file=sys.stderr)
    print(f"Bans: {summary.total_bans:,}  |  With pattern: {summary.bans_with_pattern:,}", file=sys.stderr)
    print(f"Jumps: {summary.total_jumps:,}  |  Perfect: {summary.total_perfect_jumps:,}", file=sys.stderr)
    print("", file=sys.stderr)
    print("Perfect-jump ratio:", file=sys.stderr)
    print(
        f"  Overall: {summary.overall_perfect_ratio}  |  Mean: {summary.mean_perfect_ratio}  "
        f"|  Median: {summary.median_perfect_ratio}",
        file=sys.stderr,
    )
    hist = summary.perfect_ratio_histogram
    print(
        "  Distribution:  " + "  |  ".join(f"{k}: {v}" for k, v in hist.items()),
        file=sys.stderr,
    )
