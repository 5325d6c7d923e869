from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool
from .config import Settings
import logging

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def create_db_engine(settings: Settings) -> Engine:
    """
    Build the engine described by ``settings``.

    With DB_POOL_ENABLED off every checkout opens a fresh connection and
    closing it really closes it (NullPool). Turning it on swaps in a
    QueuePool; callers do not change.
    """
    options = {
        "echo": settings.DB_ECHO_SQL,
    }

    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["connect_args"] = {"connect_timeout": settings.DB_CONNECT_TIMEOUT}

    if settings.DB_POOL_ENABLED:
        options.update(
            poolclass=QueuePool,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
    else:
        options["poolclass"] = NullPool

    engine = create_engine(settings.DATABASE_URL, **options)
    _register_listeners(engine)
    return engine


def _register_listeners(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        logger.debug("New database connection established")

    @event.listens_for(engine, "checkout")
    def receive_checkout(dbapi_conn, connection_record, connection_proxy):
        logger.debug("Connection checked out")


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False  # Objects stay readable after the session closes
    )


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables(engine: Engine):
    """
    Create all database tables defined in models.

    ⚠️ WARNING: Only use this in development and tests!
    In production, use Alembic migrations instead.
    """
    import app.models.student  # noqa: F401  registers the table on Base

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("✅ Database tables created successfully!")


def drop_database_tables(engine: Engine):
    """
    Drop all database tables.

    ⚠️ DANGER: This will delete all data!
    """
    logger.warning("⚠️ Dropping all database tables...")
    Base.metadata.drop_all(bind=engine)
    logger.info("✅ Database tables dropped!")


def check_database_connection(engine: Engine) -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("✅ Database connection successful!")
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    from .config import settings, print_config
    print_config(settings)

    if check_database_connection(create_db_engine(settings)):
        print("✅ Connection successful!")
    else:
        print("❌ Connection failed!")
