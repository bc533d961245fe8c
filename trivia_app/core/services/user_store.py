"""Player profile storage used to record final scores."""

from __future__ import annotations

import logging

from trivia_app.core.models import UserRecord

logger = logging.getLogger(__name__)


class UserStoreError(Exception):
    """Raised for invalid user store operations."""


class InMemoryUserStore:
    """Keeps player profiles for the lifetime of the application."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    def insert_user(self, user: UserRecord) -> UserRecord:
        if not user.username.strip():
            raise UserStoreError("Username must not be empty.")
        if user.username in self._users:
            raise UserStoreError(f"User '{user.username}' already exists.")
        self._users[user.username] = user
        return user

    def get_all_users(self) -> list[UserRecord]:
        return list(self._users.values())

    def get_user_by_username(self, username: str) -> UserRecord | None:
        return self._users.get(username)

    def update_user(self, user: UserRecord) -> None:
        if user.username not in self._users:
            raise UserStoreError(f"User '{user.username}' does not exist.")
        self._users[user.username] = user

    def delete_user(self, user: UserRecord) -> None:
        self.delete_user_by_username(user.username)

    def delete_user_by_username(self, username: str) -> None:
        self._users.pop(username, None)

    def get_users_by_score_paged(self, offset: int, limit: int) -> list[UserRecord]:
        """Return users ordered by best score, highest first."""
        if offset < 0 or limit < 0:
            raise ValueError("Offset and limit must not be negative.")
        ranked = sorted(self._users.values(), key=lambda u: (-u.score, u.username))
        return ranked[offset : offset + limit]

    def record_final_score(self, username: str, score: int) -> UserRecord:
        """Count a finished game and keep the player's best score."""
        if score < 0:
            raise ValueError("Score must not be negative.")
        user = self._users.get(username)
        if user is None:
            user = self.insert_user(UserRecord(username=username))
        user.games_played += 1
        if score > user.score:
            user.score = score
        logger.info("Recorded score %d for %s (best %d)", score, username, user.score)
        return user
