"""
Store connections: SQLAlchemy async engine and the Mongo collection handle
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from core.config import Settings
import logging

logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the relational store"""
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.ENVIRONMENT == "development",
        poolclass=NullPool,
        future=True
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Create session factory bound to the engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


def create_mongo_client(settings: Settings) -> AsyncMongoClient:
    """Create the document store client (connects lazily)"""
    return AsyncMongoClient(settings.MONGO_URL)


def get_book_collection(client: AsyncMongoClient, settings: Settings) -> AsyncCollection:
    """Return the collection the migrate and export steps use"""
    logger.debug(
        f"Using collection {settings.MONGO_DATABASE}.{settings.MONGO_COLLECTION}"
    )
    return client[settings.MONGO_DATABASE][settings.MONGO_COLLECTION]
