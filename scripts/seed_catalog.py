"""
Populate the configured database with the demo platform/track/playlist catalog.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cardj.config import get_settings
from cardj.db import SqlDbClient
from cardj.seed import seed_demo_catalog

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the CarDJ demo catalog")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Override DATABASE_URL",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")

    database_url = args.database_url or get_settings().database_url
    if not database_url:
        logger.error("No database configured; set DATABASE_URL or pass --database-url")
        return 1

    db = SqlDbClient(database_url)
    if seed_demo_catalog(db):
        logger.info("Demo catalog written to %s", db.engine.url.render_as_string())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
