"""Agent scoping for analytics inputs."""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def normalize_scope(scope: Optional[str]) -> Optional[str]:
    """Blank scopes mean the unrestricted admin view."""

    if scope is None:
        return None
    value = scope.strip()
    return value or None


def scoped(records: Optional[Iterable[T]], scope: Optional[str], *, attribute: str = "agent_id") -> list[T]:
    """Return the records owned by ``scope``, or all of them when unscoped."""

    items = list(records or ())
    agent = normalize_scope(scope)
    if agent is None:
        return items
    return [record for record in items if getattr(record, attribute, None) == agent]
