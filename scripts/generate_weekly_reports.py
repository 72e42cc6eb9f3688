#!/usr/bin/env python3
"""
Generate one week's SDR reports for a company (e.g. from a Monday cron job).

Usage:
    python scripts/generate_weekly_reports.py --company <uuid> [--week 10 --year 2026] [--sdr <uuid> ...]

Without --week/--year the previous ISO week is used. Requires DATABASE_URL.
Exits with status 1 if any SDR's report failed.
"""

import argparse
import asyncio
import os
import sys
from datetime import date, timedelta
from pathlib import Path
from uuid import UUID

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

import asyncpg

from callpulse.errors import StoreUnavailableError
from callpulse.services.weekly_report_service import generate_weekly_reports
from callpulse.weekly import iso_week

PG_DSN = os.getenv("DATABASE_URL", "")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    last_week, last_year = iso_week(date.today() - timedelta(days=7))
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--company", type=UUID, required=True, help="Company id")
    parser.add_argument("--week", type=int, default=last_week, help="ISO week number (1-53)")
    parser.add_argument("--year", type=int, default=last_year, help="ISO year")
    parser.add_argument(
        "--sdr", type=UUID, action="append", dest="sdr_ids",
        help="Only this SDR (repeatable). Default: every SDR with a completed call that week",
    )
    args = parser.parse_args(argv)
    if not 1 <= args.week <= 53:
        parser.error("--week must be between 1 and 53")
    return args


async def run(args: argparse.Namespace) -> int:
    if not PG_DSN:
        print("❌ DATABASE_URL not set. Add it to .env first.")
        return 1

    conn = await asyncpg.connect(PG_DSN)
    try:
        result = await generate_weekly_reports(
            conn, args.company, args.week, args.year, sdr_ids=args.sdr_ids
        )
    except StoreUnavailableError as e:
        print(f"❌ Report store unavailable: {e}")
        return 1
    finally:
        await conn.close()

    print(f"✅ Week {result.week_number}/{result.year}: {len(result.reports)} report(s) generated")
    for report in result.reports:
        print(f"   {report.sdr_id}  {report.calls_analyzed} call(s), overall {report.avg_scores['overall']:.1f}")
    if result.skipped:
        print(f"⏭️  Skipped {len(result.skipped)} SDR(s) without analyzed calls")
    for failure in result.failed:
        print(f"❌ {failure.sdr_id}: {failure.error}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run(parse_args())))
