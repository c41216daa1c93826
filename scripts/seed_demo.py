# scripts/seed_demo.py
from __future__ import annotations

import argparse
import asyncio

from propguard.db import async_session, engine
from propguard.models import Base
from propguard.services.demo_seed import DEMO_PROPERTIES, seed_demo


async def _ensure_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def main() -> None:
    parser = argparse.ArgumentParser(description="Load demo properties, listings, reports and alerts.")
    parser.add_argument("--dry-run", action="store_true", help="Roll back instead of committing")
    args = parser.parse_args()

    await _ensure_schema()

    async with async_session() as session:
        res = await seed_demo(session)
        if args.dry_run:
            await session.rollback()
        else:
            await session.commit()

    print(f"Demo seed ({len(DEMO_PROPERTIES)} properties): {res} dry_run={args.dry_run}")


if __name__ == "__main__":
    asyncio.run(main())
