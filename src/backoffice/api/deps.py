"""Shared request dependencies and error translation for route handlers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Depends, Header, HTTPException, status

from ..data.store import DocumentStore, RecordNotFoundError, StoreUnavailableError, get_store
from ..services.analytics.scope import normalize_scope

DEGRADED_HEADER = "X-Backoffice-Degraded"


def get_document_store() -> DocumentStore:
    return get_store()


def get_scope(
    x_agent_id: Optional[str] = Header(
        default=None,
        description="Store key of the signed-in agent. Omit for the admin view.",
    ),
) -> Optional[str]:
    return normalize_scope(x_agent_id)


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate store and validation failures into HTTP errors."""

    try:
        yield
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def require_admin(scope: Optional[str] = Depends(get_scope)) -> None:
    """Reject agent-scoped callers on admin-only operations."""
    if scope:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only administrators can manage agents.")


def ensure_own_agent(agent_key: str, scope: Optional[str]) -> None:
    if scope and agent_key != scope:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"agents record '{agent_key}' not found")
