"""Report entrypoint - Standalone script for generating address statements.

Usage:
    python -m app.report_entrypoint <address> <from> <to>             # Print CSV to stdout
    python -m app.report_entrypoint <address> <from> <to> out.csv     # Write CSV to file
"""

import sys
from pathlib import Path

from app.core.db import SessionLocal
from app.core.exceptions import InvalidInputError, StoreUnavailableError
from app.core.logging import get_logger
from app.services.statement_service import StatementService

logger = get_logger("report_entrypoint")

USAGE = "Usage: python -m app.report_entrypoint <address> <from> <to> [output.csv]"


def run_report(address: str, from_date: str, to_date: str) -> str:
    """Generate one statement with a dedicated session."""
    with SessionLocal() as db:
        return StatementService.from_session(db).generate_report(address, from_date, to_date)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (3, 4):
        logger.error(USAGE)
        return 2

    address, from_date, to_date = args[:3]
    try:
        report = run_report(address, from_date, to_date)
    except InvalidInputError as exc:
        logger.error(str(exc))
        return 2
    except StoreUnavailableError as exc:
        logger.error(f"Report failed: {exc}")
        return 1

    if len(args) == 4:
        output = Path(args[3])
        output.write_text(report, encoding="utf-8")
        logger.info(f"Wrote {report.count(chr(10)) - 1} rows to {output}")
    else:
        sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
