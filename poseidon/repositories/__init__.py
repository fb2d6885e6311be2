"""Persistence boundary (repositories)."""

from poseidon.repositories.base import Repository, SqlAlchemyRepository
from poseidon.repositories.users import UserRepository

__all__ = ["Repository", "SqlAlchemyRepository", "UserRepository"]
