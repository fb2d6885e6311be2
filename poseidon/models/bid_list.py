"""ORM model for bid lists."""

from sqlalchemy import Column, DateTime, Float, Integer, String

from poseidon.models.base import AuditMixin, Base


class BidList(AuditMixin, Base):
    """
    One bid on a financial instrument.

    Only account, type and bid_quantity are edited through the back-office forms;
    the remaining columns are loaded from upstream systems and kept as-is on update.
    """

    __tablename__ = "bid_list"

    id = Column("bid_list_id", Integer, primary_key=True, autoincrement=True)
    account = Column(String(30), nullable=False)
    type = Column(String(30), nullable=False)
    bid_quantity = Column(Float, nullable=True)
    ask_quantity = Column(Float, nullable=True)
    bid = Column(Float, nullable=True)
    ask = Column(Float, nullable=True)
    benchmark = Column(String(125), nullable=True)
    bid_list_date = Column(DateTime, nullable=True)
    commentary = Column(String(125), nullable=True)
    security = Column(String(125), nullable=True)
    status = Column(String(10), nullable=True)
    trader = Column(String(125), nullable=True)
    book = Column(String(125), nullable=True)
    deal_name = Column(String(125), nullable=True)
    deal_type = Column(String(125), nullable=True)
    source_list_id = Column(String(125), nullable=True)
    side = Column(String(125), nullable=True)
