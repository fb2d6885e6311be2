"""ORM model for application users (credential store and RBAC)."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class User(Base):
    """
    Back-office account used for form login and role-based access control.

    role: an open string set, e.g. 'ADMIN' or 'USER'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(125), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    fullname = Column(String(125), nullable=False)
    role = Column(String(125), nullable=False, default="USER")
