#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate every marketplace table on DATABASE_URL

Notes:
- This script only resets database structure, does not seed data
- To seed demo data, run `python -m script.seed_data`
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import (
    Base,
    create_db_and_tables,
    dispose_engine,
    get_engine,
)


async def drop_all_tables() -> None:
    # Registers every model on Base.metadata
    import src.service.marketplace.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    print(f'   ✅ Dropped {len(Base.metadata.tables)} tables')


async def main() -> None:
    print('🔄 Starting database reset...')
    print(f'Database URL: {settings.DATABASE_URL}')
    print('=' * 50)

    try:
        print('🗑️ Dropping tables...')
        await drop_all_tables()

        print('🏗️ Creating tables...')
        await create_db_and_tables()
    finally:
        await dispose_engine()

    print('=' * 50)
    print('✅ Database reset completed!')
    print('💡 To seed demo data, run: python -m script.seed_data')


if __name__ == '__main__':
    asyncio.run(main())
