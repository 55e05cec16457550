"""Account registration and the single active-session slot.

Passwords are stored and compared as plaintext. This tracker makes no
security claims; a deployment facing real users would swap in a salted hash
comparison here.
"""

from __future__ import annotations

from typing import Mapping, Optional

from loguru import logger

from .constants import SAVE_FAILURE_ROLLBACK
from .errors import DuplicateAccount, InvalidCredentials, NotAuthenticated, StorageFailure
from .models import Account
from .persistence import PersistenceGateway


class SessionManager:
    """Own the account set and the currently authenticated username."""

    def __init__(self, gateway: PersistenceGateway, *, on_save_failure: str = SAVE_FAILURE_ROLLBACK) -> None:
        self._gateway = gateway
        self._on_save_failure = on_save_failure
        self._accounts: dict[str, Account] = {}
        self._active: Optional[str] = None

    def load(self, accounts: Mapping[str, Account]) -> None:
        self._accounts = dict(accounts)
        self._active = None

    def __len__(self) -> int:
        return len(self._accounts)

    def is_registered(self, username: str) -> bool:
        return username in self._accounts

    def register(self, username: str, password: str) -> None:
        """Create an account and persist the account set. Does not log in."""
        if username in self._accounts:
            logger.info("Registration rejected, username taken: {}", username)
            raise DuplicateAccount(username)

        self._accounts[username] = Account(username=username, password=password)
        try:
            self._gateway.save_accounts(self._accounts)
        except StorageFailure:
            if self._on_save_failure == SAVE_FAILURE_ROLLBACK:
                del self._accounts[username]
                logger.warning("Rolled back registration of {} after failed save", username)
            raise
        logger.info("Account registered: {}", username)

    def login(self, username: str, password: str) -> None:
        account = self._accounts.get(username)
        if account is None or account.password != password:
            logger.info("Login failed for {}", username)
            raise InvalidCredentials()
        self._active = username
        logger.info("Logged in: {}", username)

    def logout(self) -> None:
        if self._active is not None:
            logger.info("Logged out: {}", self._active)
        self._active = None

    def current_account(self) -> Optional[str]:
        return self._active

    def require_account(self) -> str:
        if self._active is None:
            raise NotAuthenticated()
        return self._active
