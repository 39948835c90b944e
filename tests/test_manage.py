# tests/test_manage.py
"""Tests for the maintenance command-line interface."""

from unittest.mock import patch

import pytest
from jose import jwt

from farm_ledger.scripts import manage


@pytest.fixture()
def cli_session(db_session):
    with patch.object(manage, "SessionLocal", lambda: db_session):
        yield db_session


def test_reset_requires_confirmation(cli_session, default_users, capsys) -> None:
    assert manage.main(["reset"]) == 2
    assert "--yes" in capsys.readouterr().err


def test_reset_with_confirmation(cli_session, default_users) -> None:
    with patch.object(manage.CredentialStore, "reset_all") as reset_all:
        assert manage.main(["reset", "--yes"]) == 0
    reset_all.assert_called_once_with()


def test_issue_token_for_known_user(cli_session, default_users, capsys) -> None:
    assert manage.main(["issue-token", "user1"]) == 0
    token = capsys.readouterr().out.strip()
    assert jwt.get_unverified_claims(token)["username"] == "user1"


def test_issue_token_for_unknown_user(cli_session, capsys) -> None:
    assert manage.main(["issue-token", "ghost"]) == 1
    assert "ghost" in capsys.readouterr().err


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        manage.main([])
