"""ORM model for yield-curve points."""

from sqlalchemy import Column, DateTime, Float, Integer

from poseidon.models.base import Base, CreationAuditMixin


class CurvePoint(CreationAuditMixin, Base):
    """A (term, value) point on the curve identified by curve_id, as of a given date."""

    __tablename__ = "curve_point"

    id = Column(Integer, primary_key=True, autoincrement=True)
    curve_id = Column(Integer, nullable=True, index=True)
    as_of_date = Column(DateTime, nullable=True)
    term = Column(Float, nullable=True)
    value = Column(Float, nullable=True)
