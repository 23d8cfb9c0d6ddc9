from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from crewledger.core.config import settings
from crewledger.core.logging_config import get_logger

logger = get_logger("db.mongo")

class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]

    # Create indexes
    await create_indexes()
    logger.info("Connected to MongoDB", extra={"database": settings.DATABASE_NAME})

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create database indexes."""
    # Bookings are always read per season, ordered by arrival
    await mongodb.db["bookings"].create_index([("season_id", 1), ("arrival_date", 1)])

    # Per-booking child records
    await mongodb.db["apa_entries"].create_index([("booking_id", 1), ("created_at", -1)])
    await mongodb.db["expenses"].create_index("booking_id")
    await mongodb.db["expenses"].create_index("season_id")
    await mongodb.db["score_entries"].create_index([("booking_id", 1), ("created_at", -1)])

    # Crew
    await mongodb.db["crew_members"].create_index("season_id")
    await mongodb.db["crew_members"].create_index([("season_id", 1), ("email", 1)], unique=True)

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db
