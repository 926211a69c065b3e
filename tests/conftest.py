import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import Base, build_engine, init_db
from dependencies.store import get_db
from services.grade_sync import GradeSyncService
from services.record_store import SqlRecordStore


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return SqlRecordStore(db)


@pytest.fixture
def sync(store):
    return GradeSyncService(store)


@pytest.fixture
def add_student(store):
    """Insert a roster entry directly (no grade hooks)."""
    def _add(first_name, last_name, student_number=None, **extra):
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "student_number": student_number or f"{first_name[:1]}{last_name[:1]}-001",
            "year_level": extra.pop("year_level", 1),
            "course": extra.pop("course", "BSIT"),
        }
        return store.insert_student(data)
    return _add


@pytest.fixture
def client(engine):
    from main import app

    SessionTest = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = SessionTest()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
