"""SQLAlchemy declarative Base and shared audit columns."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import DeclarativeBase

# Range of a SQL INTEGER column (signed 32-bit); ids and integer fields must fit.
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class CreationAuditMixin:
    """Who created the row and when; written once, at first insert."""

    creation_name = Column(String(125), nullable=True)
    creation_date = Column(DateTime(timezone=True), nullable=True)


class RevisionAuditMixin:
    """Who last saved the row and when; rewritten on every update."""

    revision_name = Column(String(125), nullable=True)
    revision_date = Column(DateTime(timezone=True), nullable=True)


class AuditMixin(CreationAuditMixin, RevisionAuditMixin):
    """Full creation + revision audit trail."""

    pass
