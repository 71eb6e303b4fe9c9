"""Replace all patients and appointments with the demo data set.

Usage:
    cd backend
    uv run python seed.py
"""

from __future__ import annotations

import asyncio

from carebase.config import settings
from carebase.database import ConnectionManager, async_session, engine
from carebase.services.seed_service import seed_database


async def main() -> None:
    connection = ConnectionManager(engine, create_tables=settings.create_tables)
    await connection.connect(settings.db_max_retries, settings.db_retry_delay_ms)
    try:
        result = await seed_database(async_session)
    finally:
        await connection.dispose()

    print(f"Seeded {result.patients} patients and {result.appointments} appointments.")


if __name__ == "__main__":
    asyncio.run(main())
