"""Declarative structural validation rules.

Rules run before every write and never touch the network. Each rule
returns ``(attribute, message)`` pairs; the object collects them into a
field-to-messages mapping.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol


class Rule(Protocol):
    def check(self, obj: Any) -> list[tuple[str, str]]: ...


class Required:
    """Each named attribute must be set and non-blank."""

    def __init__(self, *names: str) -> None:
        self.names = names

    def check(self, obj: Any) -> list[tuple[str, str]]:
        problems: list[tuple[str, str]] = []
        for name in self.names:
            value = getattr(obj, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                problems.append((name, "can't be blank"))
        return problems


class Inclusion:
    """A set attribute must be one of *choices*."""

    def __init__(self, name: str, choices: Iterable[str]) -> None:
        self.name = name
        self.choices = tuple(choices)

    def check(self, obj: Any) -> list[tuple[str, str]]:
        value = getattr(obj, self.name)
        if value is None or str(value) in self.choices:
            return []
        return [(self.name, f"is not included in the list ({', '.join(self.choices)})")]


class MinChildren:
    """An association must hold at least *minimum* children.

    Only collections the caller has materialized are checked. A persisted
    parent whose children were never loaded keeps its server-side children.
    """

    def __init__(self, association: str, minimum: int = 1) -> None:
        self.association = association
        self.minimum = minimum

    def check(self, obj: Any) -> list[tuple[str, str]]:
        children = obj.attached_children(self.association)
        if children is None and not obj.new_record:
            return []
        if len(children or []) < self.minimum:
            noun = "child" if self.minimum == 1 else "children"
            return [(self.association, f"requires at least {self.minimum} {noun}")]
        return []


class Custom:
    """Wrap a callable returning ``(attribute, message)`` pairs."""

    def __init__(self, func: Callable[[Any], list[tuple[str, str]]]) -> None:
        self.func = func

    def check(self, obj: Any) -> list[tuple[str, str]]:
        return list(self.func(obj))


def run_rules(obj: Any, rules: Iterable[Rule]) -> dict[str, list[str]]:
    """Run *rules* against *obj* and collect messages per attribute."""
    errors: dict[str, list[str]] = {}
    for rule in rules:
        for name, message in rule.check(obj):
            errors.setdefault(name, []).append(message)
    return errors
