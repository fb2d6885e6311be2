"""Route-based access control: a static, ordered permission table consulted per request."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from poseidon.schemas.auth import SessionIdentity

FORBIDDEN_MESSAGE = "You are not authorized for the requested data."


class Access(StrEnum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    ROLE = "role"


class Decision(StrEnum):
    ALLOW = "allow"
    LOGIN = "login"  # no identity: send to the login page
    FORBIDDEN = "forbidden"  # identity lacks the required role


@dataclass(frozen=True)
class RouteRule:
    """
    One row of the permission table.

    pattern is an exact path ('/login') or a subtree ('/user/**' matches '/user'
    and everything below it).
    """

    pattern: str
    access: Access
    role: str | None = None

    def matches(self, path: str) -> bool:
        if self.pattern.endswith("/**"):
            base = self.pattern[:-3]
            return path == base or path.startswith(base + "/")
        return path == self.pattern


# Anything not matched by an explicit rule needs a logged-in user.
FALLBACK_RULE = RouteRule("/**", Access.AUTHENTICATED)


def default_rules(admin_role: str) -> tuple[RouteRule, ...]:
    """The application's table, evaluated top to bottom, first match wins."""
    return (
        RouteRule("/static/**", Access.ANONYMOUS),
        RouteRule("/favicon.ico", Access.ANONYMOUS),
        RouteRule("/login", Access.ANONYMOUS),
        RouteRule("/logout", Access.ANONYMOUS),
        RouteRule("/error", Access.ANONYMOUS),
        RouteRule("/health/**", Access.ANONYMOUS),
        RouteRule("/user/**", Access.ROLE, role=admin_role),
    )


class AccessGuard:
    """Immutable once built; safe to share across concurrent requests."""

    def __init__(self, rules: Iterable[RouteRule]) -> None:
        self.rules: tuple[RouteRule, ...] = tuple(rules)

    def rule_for(self, path: str) -> RouteRule:
        for rule in self.rules:
            if rule.matches(path):
                return rule
        return FALLBACK_RULE

    def decide(self, path: str, identity: SessionIdentity | None) -> Decision:
        rule = self.rule_for(path)
        if rule.access is Access.ANONYMOUS:
            return Decision.ALLOW
        if identity is None:
            return Decision.LOGIN
        if rule.access is Access.ROLE and not identity.has_role(rule.role or ""):
            return Decision.FORBIDDEN
        return Decision.ALLOW
