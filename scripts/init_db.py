import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import settings
from core.database import create_engine
from models.base import Base
# Import all models to ensure they are registered
from models.book import Book

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def init_database():
    logger.info("Connecting to database...")
    engine = create_engine(settings)

    async with engine.begin() as conn:
        logger.info(f"Creating tables: {', '.join(Base.metadata.tables)}")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created successfully.")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(init_database())
