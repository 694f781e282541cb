"""Import a Daily-Time-Record CSV from the command line.

    python scripts/import_dtr.py records.csv --actor-id 7
"""
from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from dtr_payroll.container import build_container
from dtr_payroll.core.context import OperatorContext
from dtr_payroll.core.logging import configure_logging

logger = logging.getLogger("dtr_payroll.scripts.import_dtr")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import a DTR CSV file")
    parser.add_argument("path", type=Path)
    parser.add_argument("--actor-id", type=int, default=None)
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    text = args.path.read_text(encoding="utf-8-sig")
    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)

    def show_progress(pct: int) -> None:
        logger.info("progress %s%%", pct)

    summary = container.dtr_import_service.import_csv(
        text,
        context=OperatorContext(actor_id=args.actor_id),
        progress=show_progress,
    )
    print(json.dumps(summary.to_dict(), indent=2))
    return 0 if summary.imported or summary.duplicates else 1


if __name__ == "__main__":
    sys.exit(main())
