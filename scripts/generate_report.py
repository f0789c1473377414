#!/usr/bin/env python3
"""
Generate the Oilseed Investment Strategy PDF.

Renders the seven-page report (cover, market metrics, Tanzania and
Kazakhstan strategies, risks, recommendation and timeline, closing page)
and saves it as Oilseed_Investment_Strategy.pdf.

Usage:
    python scripts/generate_report.py
    python scripts/generate_report.py --output reports/strategy.pdf
    python scripts/generate_report.py --check-fixtures
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging import logger
from config.settings import settings
from reporting.engine import ReportGenerationError, generate_report
from reporting.fixtures import FixtureError, check_snapshot_consistency


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate the Oilseed Investment Strategy PDF")
    parser.add_argument(
        "--output", type=Path, default=None,
        help=f"Output path (default: {settings.OUTPUT_DIR / settings.REPORT_FILENAME})",
    )
    parser.add_argument(
        "--check-fixtures", action="store_true",
        help="Warn where the report's figures differ from the dashboard data in data/",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.check_fixtures:
        try:
            issues = check_snapshot_consistency()
        except FixtureError as e:
            logger.warning(f"Fixture check skipped: {e}")
        else:
            for issue in issues:
                logger.warning(f"Snapshot drift: {issue}")
            if not issues:
                logger.info("Report snapshot matches dashboard fixtures")

    try:
        path = generate_report(output_path=args.output)
    except ReportGenerationError as e:
        print(f"Failed to generate PDF. Please try again. ({e})")
        return 1

    print(f"Report saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
