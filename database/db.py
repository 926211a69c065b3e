from sqlalchemy import create_engine               # SQLAlchemy engine factory
from sqlalchemy.orm import declarative_base         # base class for models
from sqlalchemy.orm import sessionmaker            # session factory

from config.settings import settings               # ✅ environment settings


def build_engine(url: str, **kwargs):
    # SQLite connections are shared with FastAPI's threadpool
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


# ✅ engine built from the configured DB URL
engine = build_engine(settings.DATABASE_URL)

# ✅ session factory used by request dependencies
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ declarative base shared by every model
Base = declarative_base()


def init_db(bind=None):
    """Create every table registered on Base (no migrations)."""
    from models import grades, students, subjects  # noqa: F401  registers the tables

    Base.metadata.create_all(bind=bind or engine)
