"""Health check endpoint with optional database connectivity check."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from poseidon.core.config import settings
from poseidon.core.database import check_db_connected, get_db
from poseidon.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(request: Request, db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health, the active authentication mode and database connectivity.
    Used by load balancers and monitoring; reachable without a session.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        auth_mode=request.app.state.authenticator.mode,
        database=db_status,
    )
