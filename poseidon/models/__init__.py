"""SQLAlchemy ORM models."""

from poseidon.models.base import Base
from poseidon.models.bid_list import BidList
from poseidon.models.curve_point import CurvePoint
from poseidon.models.rating import Rating
from poseidon.models.rule_name import RuleName
from poseidon.models.trade import Trade
from poseidon.models.user import User

__all__ = ["Base", "BidList", "CurvePoint", "Rating", "RuleName", "Trade", "User"]
