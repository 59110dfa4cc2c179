"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seed companies, jobs and users
- Auth headers for a regular user and an admin
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Company, Job, User  # noqa: F401
from app.core.database import Base, get_db, run_query
from app.core.security import create_access_token, get_password_hash
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE for companies -> jobs
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(engine, "before_cursor_execute", retval=True)
def _ilike_as_like(conn, cursor, statement, parameters, context, executemany):
    # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
    return statement.replace(" ILIKE ", " LIKE "), parameters


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def seed_data(db_session):
    """
    Companies c1-c3 (1-3 employees), three jobs and two users.

    Jobs: "j1" at c1 (100000, no equity), "j2" at c1 (200000, no equity),
    "j1" at c2 (100100, equity 0.5). Users: u1 (regular), admin.

    Returns job ids in insertion order.
    """
    for n in (1, 2, 3):
        run_query(
            db_session,
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [f"c{n}", f"C{n}", n, f"Desc{n}", f"http://c{n}.img"],
        )

    job_ids = []
    for title, salary, equity, handle in [
        ("j1", 100000, 0, "c1"),
        ("j2", 200000, 0, "c1"),
        ("j1", 100100, 0.5, "c2"),
    ]:
        result = run_query(
            db_session,
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)
               RETURNING id""",
            [title, salary, equity, handle],
        )
        job_ids.append(result.scalar_one())

    for username, is_admin in [("u1", False), ("admin", True)]:
        run_query(
            db_session,
            """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
               VALUES ($1, $2, $3, $4, $5, $6)""",
            [username, get_password_hash("password1"), "F", "L", f"{username}@email.com", is_admin],
        )

    db_session.commit()
    return {"job_ids": job_ids}


@pytest.fixture
def u1_headers(seed_data):
    """Bearer headers for the non-admin user u1"""
    token = create_access_token(data={"sub": "u1", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(seed_data):
    """Bearer headers for the admin user"""
    token = create_access_token(data={"sub": "admin", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}
