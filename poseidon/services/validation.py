"""Form binding and explicit field rules.

Each record type declares a tuple of FormField; a field knows how to parse its
raw form string and which rules the parsed value must satisfy. Binding and
validation are plain function calls returning FieldError lists.
"""

import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from poseidon.models.base import INTEGER_MAX, INTEGER_MIN


class BindingError(ValueError):
    """Raised by a parser when the raw form value cannot be converted."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def parse_text(raw: str) -> str | None:
    """Blank text binds to None."""
    return raw if raw.strip() else None


def parse_stripped(raw: str) -> str | None:
    """Like parse_text, minus surrounding whitespace. Used for identifiers such as usernames."""
    text = raw.strip()
    return text or None


def parse_float(raw: str) -> float | None:
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError as e:
        raise BindingError("Must be a number.") from e
    if not math.isfinite(value):
        raise BindingError("Must be a number.")
    return value


def parse_int(raw: str) -> int | None:
    text = raw.strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError as e:
        raise BindingError("Must be a whole number.") from e
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        raise BindingError(f"Must be between {INTEGER_MIN} and {INTEGER_MAX}.")
    return value


def parse_datetime(raw: str) -> datetime | None:
    """Accept ISO 8601, including the 'YYYY-MM-DDTHH:MM[:SS]' sent by datetime-local inputs."""
    text = raw.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise BindingError("Must be a date and time (YYYY-MM-DDTHH:MM:SS).") from e


class Rule:
    """A constraint on one bound value; check() returns an error message or None."""

    # Rules other than NotBlank/NotNull let None through, so optional fields stay optional.
    required = False

    def check(self, value: Any) -> str | None:
        raise NotImplementedError


@dataclass(frozen=True)
class NotBlank(Rule):
    message: str
    required = True

    def check(self, value: Any) -> str | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return self.message
        return None


@dataclass(frozen=True)
class NotNull(Rule):
    message: str
    required = True

    def check(self, value: Any) -> str | None:
        return self.message if value is None else None


@dataclass(frozen=True)
class MaxLength(Rule):
    limit: int
    message: str

    def check(self, value: Any) -> str | None:
        if value is not None and len(value) > self.limit:
            return self.message
        return None


@dataclass(frozen=True)
class Min(Rule):
    minimum: float
    message: str

    def check(self, value: Any) -> str | None:
        if value is not None and value < self.minimum:
            return self.message
        return None


@dataclass(frozen=True)
class PositiveOrZero(Rule):
    message: str

    def check(self, value: Any) -> str | None:
        if value is not None and value < 0:
            return self.message
        return None


@dataclass(frozen=True)
class Matches(Rule):
    pattern: str
    message: str

    def check(self, value: Any) -> str | None:
        if value is not None and re.fullmatch(self.pattern, value) is None:
            return self.message
        return None


@dataclass(frozen=True)
class FormField:
    """One form input: its name, label, parser, rules and HTML input type."""

    name: str
    label: str
    parse: Callable[[str], Any] = parse_text
    rules: tuple[Rule, ...] = ()
    input_type: str = "text"

    @property
    def required(self) -> bool:
        return any(rule.required for rule in self.rules)


def bind_form(
    fields: Sequence[FormField], form: Mapping[str, str]
) -> tuple[dict[str, Any], list[FieldError]]:
    """Parse each declared field from the raw form; unknown form keys are ignored."""
    values: dict[str, Any] = {}
    errors: list[FieldError] = []
    for f in fields:
        raw = form.get(f.name)
        if raw is None:
            values[f.name] = None
            continue
        try:
            values[f.name] = f.parse(raw)
        except BindingError as e:
            values[f.name] = None
            errors.append(FieldError(f.name, str(e)))
    return values, errors


def validate_values(
    fields: Sequence[FormField],
    values: Mapping[str, Any],
    skip: frozenset[str] = frozenset(),
) -> list[FieldError]:
    """Run every rule of every field (except those in skip) and collect the failures in field order."""
    errors: list[FieldError] = []
    for f in fields:
        if f.name in skip:
            continue
        value = values.get(f.name)
        for rule in f.rules:
            message = rule.check(value)
            if message is not None:
                errors.append(FieldError(f.name, message))
    return errors


def check_form(
    fields: Sequence[FormField], form: Mapping[str, str]
) -> tuple[dict[str, Any], list[FieldError]]:
    """Bind then validate. A field that failed to parse only reports its parse error."""
    values, errors = bind_form(fields, form)
    unparsed = frozenset(e.field for e in errors)
    errors.extend(validate_values(fields, values, skip=unparsed))
    return values, errors


def errors_by_field(errors: Sequence[FieldError]) -> dict[str, list[str]]:
    """Group messages per field for the form templates."""
    grouped: dict[str, list[str]] = {}
    for e in errors:
        grouped.setdefault(e.field, []).append(e.message)
    return grouped
