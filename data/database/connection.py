"""Database connection and session management."""
import time
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from famous_since.config import settings

# Create database engine
if settings.database_url.startswith("sqlite"):
    # Local/test runs: one shared connection so in-memory databases persist
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=False  # Set to True for SQL query logging
    )

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY_SECONDS = 1


def get_db_session():
    """
    Get a database session with retry logic.
    Retries up to 3 times on connection failure.
    """
    last_error = None

    for attempt in range(MAX_RETRIES):
        db = SessionLocal()
        try:
            # Test the connection with a simple query
            db.execute(text("SELECT 1"))
            return db
        except OperationalError as e:
            db.close()
            last_error = e
            if attempt < MAX_RETRIES - 1:
                print(f"[DB] Connection attempt {attempt + 1} failed, retrying in {RETRY_DELAY_SECONDS}s...")
                time.sleep(RETRY_DELAY_SECONDS)
            else:
                print(f"[DB] All {MAX_RETRIES} connection attempts failed")

    raise last_error


def get_db():
    """Dependency for getting database session with retry logic."""
    db = get_db_session()
    try:
        yield db
    finally:
        db.close()


DEFAULT_SITE_CONFIG = {"deploy_site": False}


def init_db():
    """Create all tables and the default site switches."""
    # Imported for their side effect of registering tables on Base.metadata
    from data.database import catalog_models  # noqa: F401
    from data.database.store_models import SiteConfig

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        for key, value in DEFAULT_SITE_CONFIG.items():
            if not db.query(SiteConfig).filter(SiteConfig.key == key).first():
                db.add(SiteConfig(key=key, value=value))
        db.commit()
    finally:
        db.close()
