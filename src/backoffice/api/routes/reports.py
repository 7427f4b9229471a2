"""Reports screen endpoints and downloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..deps import get_document_store, get_scope, store_errors
from ...data.repository import load_snapshot, load_snapshot_or_empty
from ...data.store import AGENTS, CUSTOMERS, ORDERS, PRODUCTS, DocumentStore
from ...schemas.dashboard import ReportsResponse
from ...services.analytics import reports_summary
from ...services.reports import CSV_MEDIA_TYPE, SECTIONS, XLSX_MEDIA_TYPE, report_to_csv, report_to_xlsx

router = APIRouter(prefix="/reports", tags=["reports"])

_REPORT_COLLECTIONS = (AGENTS, CUSTOMERS, ORDERS, PRODUCTS)


@router.get("", response_model=ReportsResponse, status_code=status.HTTP_200_OK)
def get_reports(
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> ReportsResponse:
    snapshot, error = load_snapshot_or_empty(store, _REPORT_COLLECTIONS)
    return ReportsResponse(**reports_summary(snapshot, scope), degraded=error is not None, message=error)


@router.get("/export", response_class=Response, status_code=status.HTTP_200_OK)
def export_reports(
    format: Literal["csv", "xlsx"] = Query(default="csv", description="Download format"),
    section: str = Query(
        default="agent-performance",
        description=f"Report section for CSV downloads: {', '.join(SECTIONS)}. Excel downloads include every section.",
    ),
    scope: Optional[str] = Depends(get_scope),
    store: DocumentStore = Depends(get_document_store),
) -> Response:
    with store_errors():
        snapshot = load_snapshot(store, _REPORT_COLLECTIONS)
        report = reports_summary(snapshot, scope)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        if format == "xlsx":
            content = report_to_xlsx(report)
            media_type = XLSX_MEDIA_TYPE
            file_name = f"reports_{stamp}.xlsx"
        else:
            content = report_to_csv(report, section).encode("utf-8")
            media_type = CSV_MEDIA_TYPE
            file_name = f"{section}_{stamp}.csv"

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )
