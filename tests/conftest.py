# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

# Settings are read at import time, so the environment must be prepared first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["INIT_DB_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-key-for-farm-ledger"
os.environ.pop("LOG_DIR", None)

from farm_ledger.core.tokens import create_access_token  # noqa: E402
from farm_ledger.db.session import Base  # noqa: E402
from farm_ledger.db.session import get_db as app_get_session  # noqa: E402
from farm_ledger.main import app as fastapi_app  # noqa: E402
from farm_ledger.models import Expense, Income, User  # noqa: E402
from farm_ledger.repositories.credential_store import CredentialStore  # noqa: E402

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite does not emit BEGIN itself, which breaks SAVEPOINT-based test
    # isolation; let SQLAlchemy control transactions explicitly.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits only release savepoints inside an outer transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client; entering it runs startup and so creates fresh runtime state."""
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def default_users(db_session: Session) -> dict[str, User]:
    """Seed admin, user1 and user2 and return them keyed by username."""
    store = CredentialStore(db_session)
    store.seed_default_users()
    return {
        username: store.find_by_username(username)
        for username in ("admin", "user1", "user2")
    }


@pytest.fixture()
def admin_user(default_users: dict[str, User]) -> User:
    return default_users["admin"]


@pytest.fixture()
def auth_headers(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the seeded admin."""
    token = create_access_token(admin_user.id, admin_user.username, admin_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def ledger_rows(db_session: Session) -> dict[str, list]:
    """Insert a small, mixed set of income and expense rows."""
    income = [
        Income(date="2024-01-10", project="North Field", crop="Wheat", amount=100.0),
        Income(
            date="2024-02-05",
            project="North Field",
            crop="Wheat",
            yield_=10.0,
            price_unit=20.0,
            total_income=200.0,
        ),
        Income(date="2024-02-20", project="South Field", crop="Corn", total_income=150.0),
        Income(date="2024-03-01", project="South Field", crop="Corn", amount=40.0),
    ]
    expenses = [
        Expense(date="2024-01-15", description="Seed", category="Supplies",
                project="North Field", amount=50.0),
        Expense(date="2024-02-10", description="Fuel", category="Fuel",
                project="South Field", units=10.0, cost_per_unit=3.0, total_cost=30.0),
    ]
    db_session.add_all([*income, *expenses])
    db_session.commit()
    return {"income": income, "expenses": expenses}
