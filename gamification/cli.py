"""
``recalculate-gamification`` — batch entry point for schedulers.

Exit status is 0 when the run completed (even with per-employee
failures, which are logged) and 1 on a fatal error such as an
unreachable database.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from gamification.core.logging import configure_logging
from gamification.db.session import engine
from gamification.services.recalculate import (RecalculationReport,
                                               recalculate_all)

logger = logging.getLogger("gamification.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recalculate-gamification",
        description="Rebuild point ledgers, badges and summaries from attendance history.",
    )
    parser.add_argument("--employee-id", type=int, default=None, help="only recompute this employee")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="per-employee timeout in seconds (0 disables; default from settings)",
    )
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    return parser


async def _run(args: argparse.Namespace) -> RecalculationReport:
    try:
        return await recalculate_all(employee_id=args.employee_id, timeout=args.timeout)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        report = asyncio.run(_run(args))
    except Exception:
        logger.exception("Gamification recompute aborted")
        return 1
    for failure in report.failures:
        logger.error("  ✗ %s (id=%s): %s", failure.name, failure.employee_id, failure.error)
    return 0


if __name__ == "__main__":
    sys.exit(main())
