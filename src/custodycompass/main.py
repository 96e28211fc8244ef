# src/custodycompass/main.py

import argparse
import json
import logging
import sys

from .charts import create_monthly_chart, create_timeshare_chart
from .config import load_bundle, load_config
from .dates import parse_iso
from .engine import CustodyEngine
from .export_utils import describe_day, export_days_csv, stats_lines
from .statistics import determine_primary_parent, year_days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="custodycompass",
                                     description="Resolve custody ownership from a schedule bundle")
    parser.add_argument("bundle", help="JSON configuration bundle")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_day = sub.add_parser("day", help="owner of a single date")
    p_day.add_argument("date", type=parse_iso)
    p_day.add_argument("--json", action="store_true")

    p_month = sub.add_parser("month", help="42-day month grid")
    p_month.add_argument("year", type=int)
    p_month.add_argument("month", type=int, choices=range(1, 13))
    p_month.add_argument("--week-starts-on", choices=["sunday", "monday"])

    p_stats = sub.add_parser("stats", help="yearly statistics")
    p_stats.add_argument("year", type=int)
    p_stats.add_argument("--csv", help="also write every day of the year to this CSV file")

    p_chart = sub.add_parser("chart", help="timeshare and monthly charts as PNG")
    p_chart.add_argument("year", type=int)
    p_chart.add_argument("--prefix", default="custody")
    return parser


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(message)s")
    cfg = load_config()
    names = cfg.get("parent_names")
    engine = CustodyEngine(load_bundle(args.bundle))
    logging.info(f"Loaded bundle {args.bundle}")

    if args.command == "day":
        day = engine.resolve(args.date)
        print(json.dumps(day.as_dict(), indent=2) if args.json else describe_day(day, names))

    elif args.command == "month":
        week_start = args.week_starts_on or cfg.get("week_starts_on", "sunday")
        grid = engine.month_grid(args.year, args.month, week_starts_on=week_start)
        for i in range(0, len(grid), 7):
            cells = []
            for d in grid[i:i + 7]:
                mark = d.owner.value[-1] if d.is_current_month else d.owner.value[-1].lower()
                flag = "*" if d.is_holiday_override else " "
                cells.append(f"{d.day_of_month:>2}{mark}{flag}")
            print(" ".join(cells))

    elif args.command == "stats":
        stats = engine.yearly_stats(args.year)
        for line in stats_lines(stats, names):
            print(line)
        primary = determine_primary_parent(stats)
        print(f"  Primary: {names.get(primary.value, primary.label) if names else primary.label}")
        if args.csv:
            rows = export_days_csv((engine.resolve(d) for d in year_days(args.year)), args.csv)
            logging.info(f"{rows} rows written to {args.csv}")

    elif args.command == "chart":
        stats = engine.yearly_stats(args.year)
        labels = [names.get("parentA", "Parent A"), names.get("parentB", "Parent B")] if names else None
        pie = f"{args.prefix}_{args.year}_timeshare.png"
        bars = f"{args.prefix}_{args.year}_monthly.png"
        create_timeshare_chart(stats, pie, labels=labels)
        create_monthly_chart(stats, bars, labels=labels)
        logging.info(f"Charts saved: {pie}, {bars}")

    return 0


if __name__ == "__main__":
    sys.exit(run())
