from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from wallet_api.core.config import get_settings

settings = get_settings()

# Create database engine
# echo=True will log all SQL queries, useful for debugging
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True, # Verify connections before using them
)

# Create a SessionLocal class - each instance will be a database session
SessionLocal = sessionmaker(autoflush=False, autocommit=False, bind=engine)

# Base class for our ORM models
Base = declarative_base()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    SQLite ignores ON DELETE clauses unless foreign keys are switched on
    for every connection.
    """
    if dbapi_connection.__class__.__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """
    Dependency function that provides a database session.

    :return:
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
