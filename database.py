# database.py
"""
FitTrack MongoDB Database Connection.

One Motor client per process with Beanie bound to the ``users`` and
``workouts`` collections. Tests bind Beanie to an in-memory database
through ``init_models`` and undo it with ``reset``.
"""

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from typing import Optional
import logging

from settings import settings

logger = logging.getLogger(__name__)


class Database:
    """MongoDB connection state shared by the app and the lazy middleware."""

    client: Optional[AsyncIOMotorClient] = None
    _initialized: bool = False

    @classmethod
    async def connect_db(
        cls,
        database_url: Optional[str] = None,
        database_name: Optional[str] = None,
    ):
        """
        Open the Motor client, check it answers, and bind the models.

        Args:
            database_url: MongoDB connection string, ``DATABASE_URL`` by default
            database_name: Database to use, ``DATABASE_NAME`` by default

        Raises:
            pymongo.errors.PyMongoError: MongoDB did not answer the ping.
        """
        if cls._initialized:
            return

        database_name = database_name or settings.DATABASE_NAME
        client = AsyncIOMotorClient(
            database_url or settings.DATABASE_URL,
            serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
            maxPoolSize=settings.MONGO_MAX_POOL_SIZE,
            minPoolSize=settings.MONGO_MIN_POOL_SIZE,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            raise

        cls.client = client
        logger.info(f"Connected to MongoDB: {database_name}")
        await cls.init_models(client[database_name])

    @classmethod
    async def init_models(cls, database):
        """Bind the FitTrack documents to ``database`` and build their indexes."""
        from fittrack.models.mongodb import UserDocument, WorkoutDocument

        await init_beanie(
            database=database,
            document_models=[UserDocument, WorkoutDocument]
        )
        cls._initialized = True
        logger.info(f"Beanie bound to '{database.name}'")

    @classmethod
    def reset(cls):
        """Forget the binding so the next request reconnects."""
        cls._initialized = False

    @classmethod
    async def close_db(cls):
        if cls.client:
            cls.client.close()
            cls.client = None
            logger.info("MongoDB connection closed")
        cls.reset()

    @classmethod
    async def ping(cls) -> bool:
        """True when the live client answers a ping."""
        if not cls.client:
            return False
        try:
            await cls.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False
