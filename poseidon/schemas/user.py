"""Pydantic record for the user management views."""

from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    """
    User as shown and edited in the admin views.

    password only ever holds the plain text typed into the form; it is None on
    every record built from a stored row. The stored hash is never copied here.
    """

    model_config = {"from_attributes": True}

    id: int | None = None
    username: str | None = None
    fullname: str | None = None
    role: str | None = None
    password: str | None = Field(default=None, exclude=True)
