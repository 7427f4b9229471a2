"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..deps import get_document_store
from ...data.store import AGENTS, DocumentStore, InMemoryStore, StoreUnavailableError

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(store: DocumentStore = Depends(get_document_store)) -> dict:
    """Check which store is in use and whether it answers reads."""
    if isinstance(store, InMemoryStore):
        return {
            "configured": False,
            "connected": True,
            "backend": "memory",
            "message": "Supabase not configured. Set BACKOFFICE_SUPABASE_URL and BACKOFFICE_SUPABASE_KEY environment variables.",
        }

    try:
        agents = store.get_all(AGENTS)
    except StoreUnavailableError as exc:
        return {
            "configured": True,
            "connected": False,
            "backend": "supabase",
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {
        "configured": True,
        "connected": True,
        "backend": "supabase",
        "agents_count": len(agents),
        "message": f"Database connected. Found {len(agents)} agents.",
    }
