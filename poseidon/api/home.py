"""Landing page."""

from fastapi import APIRouter, Request
from fastapi.responses import Response

from poseidon.api.rendering import render
from poseidon.services.entities import ENTITY_KINDS
from poseidon.services.users import USER

router = APIRouter()


@router.get("/")
@router.get("/home")
def home(request: Request) -> Response:
    return render(request, "home.html", {"kinds": (*ENTITY_KINDS, USER)}, view="home")
