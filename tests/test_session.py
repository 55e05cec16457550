"""Tests for registration, login and the active-session slot."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todo_tracker import persistence
from todo_tracker.errors import DuplicateAccount, InvalidCredentials, NotAuthenticated, StorageFailure
from todo_tracker.models import Account
from todo_tracker.persistence import PersistenceGateway
from todo_tracker.session import SessionManager


@pytest.fixture
def gateway(tmp_path: Path) -> PersistenceGateway:
    return PersistenceGateway(tmp_path / "tasks.json", tmp_path / "accounts.json")


@pytest.fixture
def sessions(gateway: PersistenceGateway) -> SessionManager:
    return SessionManager(gateway)


def _fail_writes(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(path, data, *, atomic=True):
        raise OSError("read-only file system")

    monkeypatch.setattr(persistence, "_save_data", boom)


class TestRegister:
    def test_register_persists_account(self, sessions: SessionManager, gateway: PersistenceGateway) -> None:
        sessions.register("bob", "pw1")
        assert sessions.is_registered("bob")
        raw = json.loads(gateway.accounts_path.read_text(encoding="utf-8"))
        assert raw == {"bob": {"username": "bob", "password": "pw1"}}

    def test_register_does_not_log_in(self, sessions: SessionManager) -> None:
        sessions.register("bob", "pw1")
        assert sessions.current_account() is None

    def test_duplicate_rejected_and_size_unchanged(self, sessions: SessionManager) -> None:
        sessions.register("alice", "a")
        with pytest.raises(DuplicateAccount) as info:
            sessions.register("alice", "b")
        assert info.value.username == "alice"
        assert len(sessions) == 1
        sessions.login("alice", "a")

    def test_failed_save_rolls_back(self, sessions: SessionManager, monkeypatch: pytest.MonkeyPatch) -> None:
        _fail_writes(monkeypatch)
        with pytest.raises(StorageFailure):
            sessions.register("bob", "pw1")
        assert not sessions.is_registered("bob")
        assert len(sessions) == 0

    def test_failed_save_keep_policy(self, gateway: PersistenceGateway, monkeypatch: pytest.MonkeyPatch) -> None:
        sessions = SessionManager(gateway, on_save_failure="keep")
        _fail_writes(monkeypatch)
        with pytest.raises(StorageFailure):
            sessions.register("bob", "pw1")
        assert sessions.is_registered("bob")


class TestLogin:
    def test_login_sets_active(self, sessions: SessionManager) -> None:
        sessions.register("bob", "pw1")
        sessions.login("bob", "pw1")
        assert sessions.current_account() == "bob"
        assert sessions.require_account() == "bob"

    def test_wrong_password_and_unknown_user_look_the_same(self, sessions: SessionManager) -> None:
        sessions.register("alice", "right")
        with pytest.raises(InvalidCredentials) as wrong:
            sessions.login("alice", "wrong")
        with pytest.raises(InvalidCredentials) as unknown:
            sessions.login("nobody", "x")
        assert str(wrong.value) == str(unknown.value)
        assert sessions.current_account() is None

    def test_password_compared_exactly(self, sessions: SessionManager) -> None:
        sessions.register("bob", "pw1")
        with pytest.raises(InvalidCredentials):
            sessions.login("bob", "pw1 ")
        with pytest.raises(InvalidCredentials):
            sessions.login("bob", "PW1")

    def test_login_does_not_write(self, sessions: SessionManager, gateway: PersistenceGateway) -> None:
        sessions.load({"bob": Account("bob", "pw1")})
        sessions.login("bob", "pw1")
        assert not gateway.accounts_path.exists()

    def test_login_switches_account(self, sessions: SessionManager) -> None:
        sessions.register("alice", "a")
        sessions.register("bob", "b")
        sessions.login("alice", "a")
        sessions.login("bob", "b")
        assert sessions.current_account() == "bob"


class TestLogout:
    def test_logout_clears_slot(self, sessions: SessionManager) -> None:
        sessions.register("bob", "pw1")
        sessions.login("bob", "pw1")
        sessions.logout()
        assert sessions.current_account() is None
        with pytest.raises(NotAuthenticated):
            sessions.require_account()

    def test_logout_when_logged_out(self, sessions: SessionManager) -> None:
        sessions.logout()
        assert sessions.current_account() is None
