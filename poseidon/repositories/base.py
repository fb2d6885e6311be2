"""Generic persistence boundary: one repository instance per entity kind."""

import logging
from collections.abc import Sequence
from typing import Generic, Protocol, TypeVar

from sqlalchemy import exists
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.core.errors import PersistenceFailure
from poseidon.models import Base
from poseidon.models.base import INTEGER_MAX, INTEGER_MIN

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Protocol[ModelT]):
    """CRUD primitives the workflow relies on. Implementations raise PersistenceFailure, nothing else."""

    def find_all(self) -> Sequence[ModelT]: ...

    def find_by_id(self, record_id: int) -> ModelT | None: ...

    def save(self, entity: ModelT) -> ModelT: ...

    def delete_by_id(self, record_id: int) -> None: ...

    def exists_by_id(self, record_id: int) -> bool: ...


class SqlAlchemyRepository(Generic[ModelT]):
    """
    Repository over one mapped class, bound to a request-scoped Session.

    Every method commits (or rolls back) its own unit of work and translates
    SQLAlchemyError into PersistenceFailure so callers never see driver errors.
    """

    def __init__(self, db: Session, model: type[ModelT]) -> None:
        self.db = db
        self.model = model

    def _fail(self, action: str, exc: SQLAlchemyError) -> PersistenceFailure:
        self.db.rollback()
        logger.exception(
            "Database error during %s on %s: %s",
            action,
            self.model.__tablename__,
            exc,
        )
        return PersistenceFailure(f"Database error while trying to {action}.", cause=exc)

    @staticmethod
    def _storable_id(record_id: int) -> bool:
        # No row can have an id outside the INTEGER range; the driver would overflow on it.
        return INTEGER_MIN <= record_id <= INTEGER_MAX

    def find_all(self) -> list[ModelT]:
        try:
            return self.db.query(self.model).order_by(self.model.id).all()
        except SQLAlchemyError as e:
            raise self._fail("list records", e) from e

    def find_by_id(self, record_id: int) -> ModelT | None:
        if not self._storable_id(record_id):
            return None
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._fail("load record", e) from e

    def save(self, entity: ModelT) -> ModelT:
        """Insert when entity.id is None, otherwise update the persisted row."""
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
            return entity
        except SQLAlchemyError as e:
            raise self._fail("save record", e) from e

    def delete_by_id(self, record_id: int) -> None:
        if not self._storable_id(record_id):
            return
        try:
            self.db.query(self.model).filter(self.model.id == record_id).delete(
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete record", e) from e

    def exists_by_id(self, record_id: int) -> bool:
        if not self._storable_id(record_id):
            return False
        try:
            return bool(
                self.db.query(exists().where(self.model.id == record_id)).scalar()
            )
        except SQLAlchemyError as e:
            raise self._fail("check record", e) from e
