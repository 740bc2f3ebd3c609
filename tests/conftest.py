# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import config, security
from app.db.base import Base
from app.db.database import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.student_model import StudentCreate
from app.models.user_model import UserCreate
from app.services import student_service, user_service
from app.services.access_policy import CallerContext
from app.services.database_service import DatabaseService


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """bcrypt's minimum cost keeps the suite fast."""
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine():
    """
    A NEW, CLEAN in-memory database for EACH test function. StaticPool keeps
    the single connection alive so every session sees the same data.
    """
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def db_service(session):
    return DatabaseService(db_session=session)


# --- Actors ---

def caller_for(user) -> CallerContext:
    return CallerContext(user_id=user.id, role=user.role, email=user.email)


@pytest.fixture
def make_user(db_service):
    def _make(name: str, email: str, role: str = "faculty", password: str = "secret123"):
        return user_service.register_user(
            db_service, UserCreate(name=name, email=email, password=password, role=role)
        )
    return _make


@pytest.fixture
def admin(make_user):
    return make_user("Ada Admin", "ada@example.edu", role="admin")


@pytest.fixture
def faculty(make_user):
    return make_user("Grace Hopper", "grace@example.edu")


@pytest.fixture
def other_faculty(make_user):
    return make_user("Alan Turing", "alan@example.edu")


@pytest.fixture
def admin_caller(admin):
    return caller_for(admin)


@pytest.fixture
def faculty_caller(faculty):
    return caller_for(faculty)


@pytest.fixture
def other_caller(other_faculty):
    return caller_for(other_faculty)


@pytest.fixture
def add_student(db_service):
    """Adds a student on behalf of the given faculty caller."""
    def _add(caller: CallerContext, name: str, reg_no: str):
        return student_service.create_student(db_service, caller, StudentCreate(name=name, regNo=reg_no))
    return _add


# --- HTTP ---

@pytest.fixture
def client(session):
    """A TestClient whose requests share the test's database session."""
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = security.create_access_token(subject=user.id, role=user.role, email=user.email)
        return {"Authorization": f"Bearer {token}"}
    return _headers
