#!/usr/bin/env python3
"""Run report generation jobs from the command line or a scheduler.

Usage locally (from backend/):
    python -m scripts.run_reports generate-daily                 # yesterday
    python -m scripts.run_reports generate-daily 2025-06-01
    python -m scripts.run_reports generate-monthly               # previous month
    python -m scripts.run_reports generate-monthly 2025 6
    python -m scripts.run_reports generate-yearly                # previous year
    python -m scripts.run_reports generate-for-sale 2025-06-01 [--force]
    python -m scripts.run_reports regenerate-month 2025 6
    python -m scripts.run_reports auto-generate-monthly
    python -m scripts.run_reports check-missing --from 2025-01-01 --to 2025-06-30 [--dry-run]
    python -m scripts.run_reports list-missing --from 2025-06-01 --to 2025-06-30
    python -m scripts.run_reports initialize-tracker
    python -m scripts.run_reports update-finance-costs

Suggested schedule:
    generate-daily         daily, shortly after midnight
    auto-generate-monthly  daily (no-op once the current month is covered)
    generate-yearly        on 1 January

Exit status is 0 on success and 1 when the job, or any item of a batch
job, failed.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dealer_reports.config import Settings
from dealer_reports.facade import ReportingFacade
from dealer_reports.logging_config import setup_logging
from dealer_reports.schemas.reports import BatchSummary

logger = logging.getLogger("reports")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run dealership report generation jobs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("generate-daily", help="Daily report for a date (default: yesterday)")
    p.add_argument("date", nargs="?", default=None)

    p = sub.add_parser("generate-monthly", help="Monthly report (default: previous month)")
    p.add_argument("year", nargs="?", type=int, default=None)
    p.add_argument("month", nargs="?", type=int, default=None)

    p = sub.add_parser("generate-yearly", help="Yearly report (default: previous year)")
    p.add_argument("year", nargs="?", type=int, default=None)

    p = sub.add_parser("generate-for-sale", help="Day, month and year reports for a sale date")
    p.add_argument("date")
    p.add_argument("--force", action="store_true", help="Regenerate without updating the tracker")

    p = sub.add_parser("regenerate-month", help="Monthly and yearly reports for a month")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)

    sub.add_parser("auto-generate-monthly", help="Catch monthly reports up to the current month")

    p = sub.add_parser("check-missing", help="Regenerate reports for every sale date in a range")
    p.add_argument("--from", dest="from_date", default=None, help="Start date (default: lookback window)")
    p.add_argument("--to", dest="to_date", default=None, help="End date (default: today)")
    p.add_argument("--dry-run", action="store_true", help="Show what would be generated")

    p = sub.add_parser("list-missing", help="List sale dates whose reports are missing")
    p.add_argument("--from", dest="from_date", default=None, help="Start date (default: lookback window)")
    p.add_argument("--to", dest="to_date", default=None, help="End date (default: today)")

    sub.add_parser("initialize-tracker", help="Seed the tracker from existing reports")
    sub.add_parser("update-finance-costs", help="Recompute finance totals on monthly reports")

    return parser


def _log_batch(name: str, summary: BatchSummary) -> int:
    logger.info(
        "%s: %d processed, %d generated, %d updated, %d skipped, %d errors%s",
        name, summary.processed, summary.generated, summary.updated, summary.skipped,
        summary.errors, " (dry run)" if summary.dry_run else "",
    )
    if summary.failed_items:
        logger.warning("  Failed: %s", ", ".join(summary.failed_items))
    return 1 if summary.errors else 0


def run_command(args: argparse.Namespace, facade: ReportingFacade) -> int:
    cmd = args.command

    if cmd == "generate-daily":
        report = facade.generate_daily(args.date)
        logger.info("Daily report %s: %d sales, %s profit",
                    report.report_date, report.total_sales, report.total_profit)
    elif cmd == "generate-monthly":
        if (args.year is None) != (args.month is None):
            raise ValueError("generate-monthly needs both year and month, or neither")
        report = facade.generate_monthly(args.year, args.month)
        logger.info("Monthly report %d-%02d: %s profit, %s net",
                    report.year, report.month, report.total_profit, report.net_profit)
    elif cmd == "generate-yearly":
        report = facade.generate_yearly(args.year)
        logger.info("Yearly report %d: %s profit, yoy %s",
                    report.year, report.total_profit, report.yoy_growth)
    elif cmd == "generate-for-sale":
        facade.generate_for_sale(args.date, force=args.force)
    elif cmd == "regenerate-month":
        facade.regenerate_month(args.year, args.month)
    elif cmd == "auto-generate-monthly":
        result = facade.auto_generate_monthly()
        if result.generated:
            logger.info("Generated months %s, years %s", result.generated_months, result.generated_years)
        else:
            logger.info("Monthly reports already current")
    elif cmd == "check-missing":
        return _log_batch("check-missing", facade.check_missing(args.from_date, args.to_date, args.dry_run))
    elif cmd == "list-missing":
        missing = facade.list_missing(args.from_date, args.to_date)
        for item in missing:
            absent = [name for name in ("daily", "monthly", "yearly") if not getattr(item.status, name)]
            logger.info("  %s missing %s", item.date, ", ".join(absent))
        logger.info("%d sale dates with missing reports", len(missing))
    elif cmd == "initialize-tracker":
        state = facade.initialize_tracker()
        logger.info("Tracker: %s", state.model_dump())
    elif cmd == "update-finance-costs":
        return _log_batch("update-finance-costs", facade.update_finance_costs())
    return 0


def main(
    argv: Optional[List[str]] = None,
    facade_factory: Callable[[Settings], ReportingFacade] = ReportingFacade,
) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)

    t0 = time.time()
    try:
        with facade_factory(settings) as facade:
            status = run_command(args, facade)
    except ValueError as exc:
        logger.error("%s: %s", args.command, exc)
        return 1
    except Exception as exc:
        logger.exception("%s failed: %s", args.command, exc)
        return 1

    logger.info("%s finished in %.1fs (exit %d)", args.command, time.time() - t0, status)
    return status


if __name__ == "__main__":
    sys.exit(main())
