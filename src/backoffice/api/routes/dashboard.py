"""Dashboard widget endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status

from ..deps import get_document_store, get_scope
from ...data.repository import load_snapshot_or_empty
from ...data.store import DocumentStore
from ...schemas.dashboard import DashboardResponse
from ...services.analytics import dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def get_dashboard(
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> DashboardResponse:
    """Revenue, counts and top customers; zeroed with ``degraded`` set when the store is down."""
    snapshot, error = load_snapshot_or_empty(store)
    summary = dashboard_summary(snapshot, scope)
    return DashboardResponse(**summary, degraded=error is not None, message=error)
