"""HTTP routes: authentication, landing page, health and one CRUD router per entity kind."""

from fastapi import APIRouter

from poseidon.api import auth, health, home
from poseidon.api.records import build_crud_router, get_user_workflow, workflow_provider
from poseidon.services.entities import ENTITY_KINDS
from poseidon.services.users import USER

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(home.router, tags=["home"])
router.include_router(health.router, prefix="/health", tags=["health"])
for kind in ENTITY_KINDS:
    router.include_router(
        build_crud_router(workflow_provider(kind)),
        prefix=f"/{kind.name}",
        tags=[kind.name],
    )
router.include_router(build_crud_router(get_user_workflow), prefix=f"/{USER.name}", tags=[USER.name])
