"""Validated CRUD workflow shared by every back-office entity kind.

One CrudWorkflow instance serves one request for one EntityKind. Each step
returns an Outcome (Render or Redirect) and never raises for the recoverable
errors of poseidon.core.errors: validation failures re-render the form, missing
records and persistence failures become error messages.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from poseidon.core.errors import (
    PersistenceFailure,
    RecordConflict,
    RecordNotFound,
    ValidationFailed,
)
from poseidon.models import Base
from poseidon.models.base import CreationAuditMixin, RevisionAuditMixin
from poseidon.repositories.base import Repository
from poseidon.schemas.auth import SessionIdentity
from poseidon.services.outcomes import Flash, Outcome, Redirect, Render
from poseidon.services.validation import FormField, check_form, errors_by_field

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
RecordT = TypeVar("RecordT", bound=BaseModel)

LIST_TEMPLATE = "crud/list.html"
FORM_TEMPLATE = "crud/form.html"

LIST_ERROR = "Records could not be loaded. Please try again later."
SAVE_ERROR = "The record could not be saved. Please try again later."
LOAD_ERROR = "The record could not be loaded. Please try again later."
DELETE_ERROR = "The record could not be deleted. Please try again later."


@dataclass(frozen=True)
class EntityKind(Generic[ModelT, RecordT]):
    """
    Static description of one CRUD vertical.

    name is both the URL segment and the view prefix ('bidList' -> /bidList/list,
    view 'bidList/list'). fields are the form inputs, in display order, and also
    the attributes copied from the record onto the stored row. columns are the
    (attribute, header) pairs shown in the list view.
    """

    name: str
    label: str
    model: type[ModelT]
    record: type[RecordT]
    fields: tuple[FormField, ...]
    columns: tuple[tuple[str, str], ...]

    @property
    def editable(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def list_key(self) -> str:
        return f"{self.name}s"

    @property
    def list_url(self) -> str:
        return f"/{self.name}/list"

    def view(self, page: str) -> str:
        return f"{self.name}/{page}"


def _now() -> datetime:
    return datetime.now(UTC)


def stamp_creation(entity: Base, identity: SessionIdentity | None) -> None:
    """Set creation audit fields, if the model has them. Called once, before the first insert."""
    if isinstance(entity, CreationAuditMixin):
        entity.creation_date = _now()
        entity.creation_name = identity.username if identity else None


def stamp_revision(entity: Base, identity: SessionIdentity | None) -> None:
    """Set revision audit fields, if the model has them. Called on every update."""
    if isinstance(entity, RevisionAuditMixin):
        entity.revision_date = _now()
        entity.revision_name = identity.username if identity else None


class CrudWorkflow(Generic[ModelT, RecordT]):
    """Form submission -> validation -> create-or-update -> persistence -> feedback."""

    def __init__(self, kind: EntityKind[ModelT, RecordT], repository: Repository[ModelT]) -> None:
        self.kind = kind
        self.repository = repository

    # Conversions and hooks; subclasses override these for entity-specific behaviour.

    def fields_for(self, creating: bool) -> tuple[FormField, ...]:
        return self.kind.fields

    def to_record(self, entity: ModelT) -> RecordT:
        return self.kind.record.model_validate(entity)

    def new_entity(self, record: RecordT) -> ModelT:
        return self.kind.model(**{name: getattr(record, name) for name in self.kind.editable})

    def apply_changes(self, record: RecordT, entity: ModelT) -> None:
        """Copy form-editable fields onto the stored row; other columns keep their values."""
        for name in self.kind.editable:
            setattr(entity, name, getattr(record, name))

    def bind(self, form: Mapping[str, str], record_id: int | None) -> RecordT:
        """
        Build a record from raw form fields, with id forced to record_id.

        Any id submitted in the form is ignored. Raises ValidationFailed (carrying
        the partially bound record) when a field fails to parse or breaks a rule.
        """
        values, errors = check_form(self.fields_for(creating=record_id is None), form)
        record = self.kind.record(id=record_id, **values)
        if errors:
            raise ValidationFailed(errors, record)
        return record

    def persist(self, record: RecordT, identity: SessionIdentity | None) -> ModelT:
        """Insert when record.id is None, otherwise update the stored row it names."""
        if record.id is None:
            entity = self.new_entity(record)
            stamp_creation(entity, identity)
        else:
            entity = self.repository.find_by_id(record.id)
            if entity is None:
                raise RecordNotFound(self.kind.label.lower(), record.id)
            self.apply_changes(record, entity)
            stamp_revision(entity, identity)
        return self.repository.save(entity)

    # Views

    def _form(
        self,
        page: str,
        record: RecordT,
        errors: list[Any] | None = None,
        message: str | None = None,
    ) -> Render:
        context: dict[str, Any] = {
            "kind": self.kind,
            "mode": page,
            "fields": self.fields_for(creating=page == "add"),
            "record": record,
            self.kind.name: record,
            "errors": errors_by_field(errors or []),
        }
        if message:
            context["errorMessage"] = message
        return Render(self.kind.view(page), FORM_TEMPLATE, context)

    def _to_list(self, flash: Flash | None = None) -> Redirect:
        return Redirect(self.kind.list_url, flash)

    # Operations

    def _list(self, records: list[RecordT], message: str | None = None) -> Render:
        # Exposed under the kind-specific key (e.g. 'bidLists') and the generic 'records'.
        context: dict[str, Any] = {
            "kind": self.kind,
            self.kind.list_key: records,
            "records": records,
        }
        if message:
            context["errorMessage"] = message
        return Render(self.kind.view("list"), LIST_TEMPLATE, context)

    def list_view(self) -> Render:
        logger.info("Listing %s records", self.kind.name)
        try:
            entities = self.repository.find_all()
        except PersistenceFailure as e:
            logger.error("Could not list %s records: %s", self.kind.name, e.message)
            return self._list([], message=LIST_ERROR)
        return self._list([self.to_record(entity) for entity in entities])

    def create_form(self) -> Render:
        return self._form("add", self.kind.record())

    def create(self, form: Mapping[str, str], identity: SessionIdentity | None) -> Outcome:
        logger.info("Creating %s record", self.kind.name)
        try:
            record = self.bind(form, record_id=None)
        except ValidationFailed as e:
            logger.warning(
                "Validation failed for new %s record",
                self.kind.name,
                extra={"fields": [err.field for err in e.errors]},
            )
            return self._form("add", e.record, errors=e.errors)
        try:
            saved = self.persist(record, identity)
        except RecordConflict as e:
            logger.warning("Conflict creating %s record: %s", self.kind.name, e.message)
            return self._form("add", record, message=e.message)
        except PersistenceFailure as e:
            logger.error("Could not create %s record: %s", self.kind.name, e.message)
            return self._form("add", record, message=SAVE_ERROR)
        logger.info("Created %s record id=%s", self.kind.name, saved.id)
        return self._to_list(Flash.success(f"{self.kind.label} added successfully."))

    def update_form(self, record_id: int) -> Outcome:
        try:
            entity = self.repository.find_by_id(record_id)
        except PersistenceFailure as e:
            logger.error("Could not load %s record id=%s: %s", self.kind.name, record_id, e.message)
            return self._to_list(Flash.error(LOAD_ERROR))
        if entity is None:
            missing = RecordNotFound(self.kind.label.lower(), record_id)
            logger.warning("%s", missing.message)
            return self._to_list(Flash.error(missing.message))
        return self._form("update", self.to_record(entity))

    def update(
        self, record_id: int, form: Mapping[str, str], identity: SessionIdentity | None
    ) -> Outcome:
        logger.info("Updating %s record id=%s", self.kind.name, record_id)
        try:
            record = self.bind(form, record_id=record_id)
        except ValidationFailed as e:
            logger.warning(
                "Validation failed for %s record id=%s",
                self.kind.name,
                record_id,
                extra={"fields": [err.field for err in e.errors]},
            )
            return self._form("update", e.record, errors=e.errors)
        try:
            self.persist(record, identity)
        except RecordNotFound as e:
            logger.warning("%s", e.message)
            return self._to_list(Flash.error(e.message))
        except RecordConflict as e:
            logger.warning("Conflict updating %s record id=%s: %s", self.kind.name, record_id, e.message)
            return self._form("update", record, message=e.message)
        except PersistenceFailure as e:
            logger.error("Could not update %s record id=%s: %s", self.kind.name, record_id, e.message)
            return self._form("update", record, message=SAVE_ERROR)
        return self._to_list(Flash.success(f"{self.kind.label} updated successfully."))

    def delete(self, record_id: int) -> Redirect:
        logger.info("Deleting %s record id=%s", self.kind.name, record_id)
        try:
            if not self.repository.exists_by_id(record_id):
                raise RecordNotFound(self.kind.label.lower(), record_id)
            self.repository.delete_by_id(record_id)
        except RecordNotFound as e:
            logger.warning("%s", e.message)
            return self._to_list(Flash.error(e.message))
        except PersistenceFailure as e:
            logger.error("Could not delete %s record id=%s: %s", self.kind.name, record_id, e.message)
            return self._to_list(Flash.error(DELETE_ERROR))
        return self._to_list(Flash.success(f"{self.kind.label} deleted successfully."))
