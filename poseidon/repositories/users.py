"""Credential store: user repository with lookup by username."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.models import User
from poseidon.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, db: Session) -> None:
        super().__init__(db, User)

    def find_by_username(self, username: str) -> User | None:
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            raise self._fail("look up user", e) from e
