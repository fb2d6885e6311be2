"""CRUD routes for the back-office entities: one router per entity kind, same six endpoints."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from poseidon.api.deps import get_identity, get_user_repository, read_form
from poseidon.api.rendering import to_response
from poseidon.core.database import get_db
from poseidon.repositories.base import SqlAlchemyRepository
from poseidon.repositories.users import UserRepository
from poseidon.schemas.auth import SessionIdentity
from poseidon.services.crud import CrudWorkflow, EntityKind
from poseidon.services.users import UserWorkflow

WorkflowProvider = Callable[..., CrudWorkflow]


def workflow_provider(kind: EntityKind) -> WorkflowProvider:
    """Dependency factory: a CrudWorkflow for kind bound to the request's session."""

    def provide(db: Annotated[Session, Depends(get_db)]) -> CrudWorkflow:
        return CrudWorkflow(kind, SqlAlchemyRepository(db, kind.model))

    return provide


def get_user_workflow(
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserWorkflow:
    return UserWorkflow(users)


def build_crud_router(provide_workflow: WorkflowProvider) -> APIRouter:
    """
    Routes for one entity kind; mount under /{kind.name}.

    GET /list, GET /add, POST /validate, GET and POST /update/{id}, GET /delete/{id}.
    Every handler delegates to the workflow and converts its outcome to a response.
    """
    router = APIRouter()
    Workflow = Annotated[CrudWorkflow, Depends(provide_workflow)]
    Identity = Annotated[SessionIdentity, Depends(get_identity)]
    Form = Annotated[dict[str, str], Depends(read_form)]

    @router.get("/list")
    def list_records(request: Request, workflow: Workflow) -> Response:
        return to_response(request, workflow.list_view())

    @router.get("/add")
    def add_form(request: Request, workflow: Workflow) -> Response:
        return to_response(request, workflow.create_form())

    @router.post("/validate")
    def validate(request: Request, workflow: Workflow, identity: Identity, form: Form) -> Response:
        return to_response(request, workflow.create(form, identity))

    @router.get("/update/{record_id}")
    def update_form(request: Request, record_id: int, workflow: Workflow) -> Response:
        return to_response(request, workflow.update_form(record_id))

    @router.post("/update/{record_id}")
    def update(
        request: Request,
        record_id: int,
        workflow: Workflow,
        identity: Identity,
        form: Form,
    ) -> Response:
        return to_response(request, workflow.update(record_id, form, identity))

    @router.get("/delete/{record_id}")
    def delete(request: Request, record_id: int, workflow: Workflow) -> Response:
        return to_response(request, workflow.delete(record_id))

    return router
