"""ORM model for business rules."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class RuleName(Base):
    """A named business rule with its JSON definition, template and SQL fragments."""

    __tablename__ = "rule_name"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(125), nullable=True)
    description = Column(String(125), nullable=True)
    json_str = Column("json", String(125), nullable=True)
    template = Column(String(512), nullable=True)
    sql_str = Column(String(125), nullable=True)
    sql_part = Column(String(125), nullable=True)
