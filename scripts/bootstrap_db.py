#!/usr/bin/env python3
"""Bootstrap script for the tourmarket API: migrate the schema and seed the catalog tables."""

import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from sqlalchemy import select  # noqa: E402

from tourmarket.core.database import async_session_factory, close_db  # noqa: E402
from tourmarket.models import (  # noqa: E402
    ProductAmenity,
    ProductCategory,
    ProductType,
    Role,
    TargetProductAudience,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Products whose type is named "Tour" get tour rows on creation
SEED_ROWS = {
    Role: [
        {"name": "traveler", "description": "Books products"},
        {"name": "provider", "description": "Publishes products"},
        {"name": "admin", "description": "Approves products"},
    ],
    ProductType: [
        {"name": "Tour", "description": "Guided experiences with scheduled dates"},
        {"name": "Lodging", "description": "Places to stay"},
        {"name": "Transport", "description": "Transfers and rentals"},
    ],
    ProductCategory: [
        {"name": "Adventure"},
        {"name": "Culture"},
        {"name": "Gastronomy"},
    ],
    TargetProductAudience: [
        {"name": "Families"},
        {"name": "Couples"},
        {"name": "Solo travelers"},
    ],
    ProductAmenity: [
        {"name": "Guide", "icon": "guide"},
        {"name": "Meals", "icon": "meals"},
        {"name": "Transport", "icon": "bus"},
        {"name": "Wi-Fi", "icon": "wifi"},
    ],
}


def migrate_database() -> None:
    """Run the Alembic migrations up to head."""
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


async def seed_catalog() -> None:
    """Insert the catalog rows that do not exist yet, matched by name."""
    logger.info("Seeding catalog tables...")

    async with async_session_factory() as db:
        for model, rows in SEED_ROWS.items():
            result = await db.execute(select(model.name))
            existing = set(result.scalars().all())
            missing = [row for row in rows if row["name"] not in existing]
            db.add_all(model(**row) for row in missing)
            logger.info(f"{model.__tablename__}: {len(missing)} added, {len(existing)} already present")

        await db.commit()

    await close_db()
    logger.info("Catalog seeded successfully!")


def main() -> None:
    """Main bootstrap function."""
    logger.info("Starting tourmarket API bootstrap...")

    migrate_database()
    asyncio.run(seed_catalog())

    logger.info("Bootstrap completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn tourmarket.main:app --reload")


if __name__ == "__main__":
    main()
