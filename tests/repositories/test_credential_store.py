# tests/repositories/test_credential_store.py
"""Tests for user credential persistence."""

from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from farm_ledger.core.errors import UsernameTakenError, UserNotFoundError
from farm_ledger.core.security import verify_password
from farm_ledger.models import ROLE_ADMIN, ROLE_USER, Income, Project, User
from farm_ledger.repositories.credential_store import CredentialStore


def _user_count(db_session) -> int:
    return db_session.scalar(select(func.count()).select_from(User))


def test_create_hashes_password_and_defaults_display_name(db_session) -> None:
    user = CredentialStore(db_session).create(username="farmer", password="Harvest#2024")

    assert user.id is not None
    assert user.role == ROLE_USER
    assert user.display_name == "farmer"
    assert user.password_hash != "Harvest#2024"
    assert verify_password("Harvest#2024", user.password_hash)
    assert user.two_fa_enabled is False


def test_create_rejects_duplicate_username(db_session) -> None:
    store = CredentialStore(db_session)
    store.create(username="farmer", password="Harvest#2024")
    with pytest.raises(UsernameTakenError):
        store.create(username="farmer", password="Other#Pass1")
    assert _user_count(db_session) == 1


def test_find_by_username(db_session, default_users) -> None:
    store = CredentialStore(db_session)
    assert store.find_by_username("user1").role == ROLE_USER
    assert store.find_by_username("nobody") is None


def test_seed_only_when_empty(db_session) -> None:
    store = CredentialStore(db_session)
    assert store.seed_default_users() is True
    assert store.seed_default_users() is False
    assert _user_count(db_session) == 3
    admin = store.find_by_username("admin")
    assert admin.role == ROLE_ADMIN
    assert verify_password("adminpass", admin.password_hash)


def test_set_two_factor_secret(db_session, default_users) -> None:
    store = CredentialStore(db_session)
    user = store.set_two_factor_secret("user2", "JBSWY3DPEHPK3PXP")
    assert user.two_fa_secret == "JBSWY3DPEHPK3PXP"
    assert user.two_fa_enabled is True


def test_set_two_factor_secret_unknown_user(db_session) -> None:
    with pytest.raises(UserNotFoundError):
        CredentialStore(db_session).set_two_factor_secret("ghost", "JBSWY3DPEHPK3PXP")


def test_reset_all_wipes_records_and_reseeds(db_session, default_users) -> None:
    store = CredentialStore(db_session)
    store.create(username="farmer", password="Harvest#2024")
    db_session.add_all([
        Income(date="2024-01-01", project="P", crop="Wheat", amount=1.0),
        Project(name="P", crop="Wheat"),
    ])
    db_session.commit()

    store.reset_all()

    usernames = set(db_session.scalars(select(User.username)))
    assert usernames == {"admin", "user1", "user2"}
    assert db_session.scalar(select(func.count()).select_from(Income)) == 0
    assert db_session.scalar(select(func.count()).select_from(Project)) == 0


def test_reset_all_rolls_back_on_failure(db_session, default_users) -> None:
    store = CredentialStore(db_session)
    store.create(username="farmer", password="Harvest#2024")

    with patch(
        "farm_ledger.repositories.credential_store.hash_password",
        side_effect=RuntimeError("hasher unavailable"),
    ):
        with pytest.raises(RuntimeError):
            store.reset_all()

    usernames = set(db_session.scalars(select(User.username)))
    assert usernames == {"admin", "user1", "user2", "farmer"}
