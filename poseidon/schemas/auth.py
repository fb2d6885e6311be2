"""Schemas for the authenticated principal attached to each request."""

from pydantic import BaseModel, Field


class SessionIdentity(BaseModel):
    """Authenticated principal (username and granted roles) for the current request."""

    model_config = {"frozen": True}

    username: str
    roles: frozenset[str] = Field(default_factory=frozenset)
    guest: bool = Field(default=False, description="True for the auto-login guest identity")

    def has_role(self, role: str) -> bool:
        return role in self.roles
