"""Shared FastAPI dependencies: request identity, raw form fields, repositories."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from poseidon.core.database import get_db
from poseidon.repositories.users import UserRepository
from poseidon.schemas.auth import SessionIdentity


def get_identity(request: Request) -> SessionIdentity:
    """Dependency: the identity the access guard attached to this request. Raises 401 if there is none."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return identity


async def read_form(request: Request) -> dict[str, str]:
    """Dependency: submitted form fields as plain strings (file parts are dropped)."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)
