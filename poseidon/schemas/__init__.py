"""Pydantic records and response schemas."""

from poseidon.schemas.auth import SessionIdentity
from poseidon.schemas.health import HealthResponse
from poseidon.schemas.records import (
    BidListRecord,
    CurvePointRecord,
    RatingRecord,
    RuleNameRecord,
    TradeRecord,
)
from poseidon.schemas.user import UserRecord

__all__ = [
    "BidListRecord",
    "CurvePointRecord",
    "HealthResponse",
    "RatingRecord",
    "RuleNameRecord",
    "SessionIdentity",
    "TradeRecord",
    "UserRecord",
]
