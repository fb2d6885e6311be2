"""Pydantic records exchanged between the CRUD workflow and the HTML views.

A record mirrors the form-editable slice of an ORM row plus the read-only
fields the list views display. ``id`` is None until the row is persisted.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class BidListRecord(BaseModel):
    """Bid as shown and edited in the back-office."""

    model_config = {"from_attributes": True}

    id: int | None = Field(default=None, description="Primary key; None before insert.")
    account: str | None = None
    type: str | None = None
    bid_quantity: float | None = None
    creation_date: datetime | None = None


class CurvePointRecord(BaseModel):
    """Curve point as shown and edited in the back-office."""

    model_config = {"from_attributes": True}

    id: int | None = None
    curve_id: int | None = None
    as_of_date: datetime | None = None
    term: float | None = None
    value: float | None = None
    creation_date: datetime | None = None


class RatingRecord(BaseModel):
    """Rating agency grades for one instrument."""

    model_config = {"from_attributes": True}

    id: int | None = None
    moodys_rating: str | None = None
    sand_p_rating: str | None = None
    fitch_rating: str | None = None
    order_number: int | None = None


class RuleNameRecord(BaseModel):
    model_config = {"from_attributes": True}

    id: int | None = None
    name: str | None = None
    description: str | None = None
    json_str: str | None = None
    template: str | None = None
    sql_str: str | None = None
    sql_part: str | None = None


class TradeRecord(BaseModel):
    """Trade as shown in the back-office; only account, type and buy_quantity are editable."""

    model_config = {"from_attributes": True}

    id: int | None = None
    account: str | None = None
    type: str | None = None
    buy_quantity: float | None = None
    sell_quantity: float | None = None
    buy_price: float | None = None
    sell_price: float | None = None
    trade_date: datetime | None = None
    security: str | None = None
    status: str | None = None
    trader: str | None = None
    benchmark: str | None = None
    book: str | None = None
    creation_name: str | None = None
    creation_date: datetime | None = None
    revision_name: str | None = None
    revision_date: datetime | None = None
