#!/usr/bin/env python3
"""
Create tables and load the demo orders, invoices and conversations.

Usage:
    python scripts/seed_db.py            # seed if empty
    python scripts/seed_db.py --reset    # drop everything first
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from support_dispatch.infra.database import Database
from support_dispatch.services.seed_data import seed_database
from support_dispatch.utils.logger import setup_logger


async def run(reset: bool, with_conversations: bool) -> None:
    database = Database()
    try:
        if reset:
            logger.warning("Dropping all tables")
            await database.drop_models()
        await database.init_models()
        if not await seed_database(database, include_conversations=with_conversations):
            logger.info("Database already contains data; use --reset to reseed")
    finally:
        await database.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the support dispatcher database")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    parser.add_argument("--no-conversations", action="store_true", help="Skip the sample conversations")
    args = parser.parse_args()

    setup_logger()
    asyncio.run(run(args.reset, not args.no_conversations))


if __name__ == "__main__":
    main()
