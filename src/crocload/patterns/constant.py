"""Constant load: a fixed number of virtual users."""

from __future__ import annotations

from crocload.patterns.base import LoadPattern, _validate_non_negative


class ConstantPattern(LoadPattern):
    """Hold *users* virtual users for the whole duration.

    Zero is allowed so that an idle stage (``0 -> 0``) can be expressed.

    Args:
        users: Number of concurrent virtual users. Must be >= 0.

    Raises:
        ConfigError: If *users* is negative.
    """

    def __init__(self, users: int) -> None:
        _validate_non_negative(users, "users")
        self._users = users

    def users_at(self, elapsed_seconds: float) -> int:  # noqa: ARG002
        return self._users

    def describe(self) -> str:
        return f"Hold: {self._users} users"
