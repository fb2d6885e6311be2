"""ORM model for trades."""

from sqlalchemy import Column, DateTime, Float, Integer, String

from poseidon.models.base import AuditMixin, Base


class Trade(AuditMixin, Base):
    """A booked trade. Forms edit account, type and buy_quantity only."""

    __tablename__ = "trade"

    id = Column("trade_id", Integer, primary_key=True, autoincrement=True)
    account = Column(String(30), nullable=False)
    type = Column(String(30), nullable=False)
    buy_quantity = Column(Float, nullable=True)
    sell_quantity = Column(Float, nullable=True)
    buy_price = Column(Float, nullable=True)
    sell_price = Column(Float, nullable=True)
    trade_date = Column(DateTime, nullable=True)
    security = Column(String(125), nullable=True)
    status = Column(String(10), nullable=True)
    trader = Column(String(125), nullable=True)
    benchmark = Column(String(125), nullable=True)
    book = Column(String(125), nullable=True)
    deal_name = Column(String(125), nullable=True)
    deal_type = Column(String(125), nullable=True)
    source_list_id = Column(String(125), nullable=True)
    side = Column(String(125), nullable=True)
