"""Live agent locations."""

from __future__ import annotations

import threading

from fastapi import APIRouter, Depends, Request, status

from ..deps import get_document_store
from ...data.store import DocumentStore
from ...schemas.territories import AgentMarkerModel, TrackedAgentsResponse
from ...services.tracking import LiveAgentTracker

router = APIRouter(prefix="/tracking", tags=["tracking"])

_tracker_lock = threading.Lock()


def get_tracker(request: Request, store: DocumentStore = Depends(get_document_store)) -> LiveAgentTracker:
    """One tracker per application, started on first use and stopped at shutdown."""
    tracker = getattr(request.app.state, "agent_tracker", None)
    if tracker is not None:
        return tracker
    with _tracker_lock:
        tracker = getattr(request.app.state, "agent_tracker", None)
        if tracker is None:
            tracker = LiveAgentTracker(store).start()
            request.app.state.agent_tracker = tracker
    return tracker


@router.get("/agents", response_model=TrackedAgentsResponse, status_code=status.HTTP_200_OK)
def get_tracked_agents(tracker: LiveAgentTracker = Depends(get_tracker)) -> TrackedAgentsResponse:
    return TrackedAgentsResponse(
        agents=[AgentMarkerModel(**marker) for marker in tracker.latest()],
        updates=tracker.updates,
    )
