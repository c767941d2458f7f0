#!/usr/bin/env python3
"""
Script to bootstrap a farm's breeding configuration.

This script:
1. Picks the farm identifier (given or freshly generated)
2. Stores the default breeding settings for it, unless settings already exist
3. Optionally overrides individual settings from the command line

Usage:
  python scripts/create_farm.py [--farm-id UUID] [--gestation-days 283] [--pregnancy-check-days 40]

The farm ID printed at the end goes into the X-Farm-ID header of API calls.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError
from src.application.use_cases.breeding import update_breeding_settings
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def create_farm(
    farm_id: UUID | None = None,
    gestation_days: int | None = None,
    pregnancy_check_days: int | None = None,
) -> UUID:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    farm_uuid = farm_id or uuid4()

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            existing = await uow.breeding_settings.get(farm_uuid)
            if existing and gestation_days is None and pregnancy_check_days is None:
                print(f"ℹ️  Farm {farm_uuid} already has breeding settings, nothing to do")
                return farm_uuid

            stored = await update_breeding_settings.execute(
                uow,
                farm_uuid,
                update_breeding_settings.UpdateBreedingSettingsInput(
                    default_gestation_days=gestation_days,
                    pregnancy_check_days=pregnancy_check_days,
                ),
            )
            await uow.commit()

        print("\n✅ Farm ready!")
        print(f"   Farm ID: {stored.farm_id}")
        print(f"   Gestation: {stored.default_gestation_days} days")
        print(f"   Pregnancy check: {stored.pregnancy_check_days} days after service")
        print(f"   Dry-off: {stored.dry_period_days} days before calving")
        print(f"   Postpartum delay: {stored.postpartum_breeding_delay_days} days")
        return farm_uuid
    except AppError as exc:
        print(f"\n❌ Error creating farm: {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Bootstrap breeding settings for a farm")
    parser.add_argument("--farm-id", type=UUID, default=None)
    parser.add_argument("--gestation-days", type=int, default=None)
    parser.add_argument("--pregnancy-check-days", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(
        create_farm(
            farm_id=args.farm_id,
            gestation_days=args.gestation_days,
            pregnancy_check_days=args.pregnancy_check_days,
        )
    )


if __name__ == "__main__":
    main()
