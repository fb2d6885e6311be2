"""What a workflow step asks the web layer to do: render a view or redirect."""

from dataclasses import dataclass, field
from typing import Any, Literal

FlashKind = Literal["success", "error"]


@dataclass(frozen=True)
class Flash:
    """One-shot message shown on the page after a redirect."""

    kind: FlashKind
    message: str

    @classmethod
    def success(cls, message: str) -> "Flash":
        return cls("success", message)

    @classmethod
    def error(cls, message: str) -> "Flash":
        return cls("error", message)


@dataclass
class Render:
    """Render a template. view is the logical page name, e.g. 'bidList/update'."""

    view: str
    template: str
    context: dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Redirect:
    url: str
    flash: Flash | None = None


Outcome = Render | Redirect
