"""Database domain mixins package."""

from .db_users import UserDbMixin

__all__ = [
    "UserDbMixin",
]
