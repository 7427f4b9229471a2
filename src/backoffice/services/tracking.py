"""Live agent locations fed by a store subscription."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .territories import agent_marker
from ..data.records import parse_agents
from ..data.store import AGENTS, DocumentStore, Subscription

logger = logging.getLogger(__name__)

MarkersCallback = Callable[[list[dict]], None]


class LiveAgentTracker:
    """Keeps the agent marker list current for the live map.

    Every emission from the store replaces the whole list; markers are never
    merged with the previous emission.
    """

    def __init__(self, store: DocumentStore, on_change: Optional[MarkersCallback] = None) -> None:
        self._store = store
        self._on_change = on_change
        self._lock = threading.Lock()
        self._markers: list[dict] = []
        self._subscription: Optional[Subscription] = None
        self.updates = 0

    @property
    def running(self) -> bool:
        return self._subscription is not None and not self._subscription.cancelled

    def start(self) -> "LiveAgentTracker":
        if self.running:
            return self
        self._subscription = self._store.subscribe(AGENTS, self._handle_update)
        logger.info("Live agent tracking started")
        return self

    def _handle_update(self, records: dict[str, Any]) -> None:
        markers = [
            agent_marker(agent, agent.customers_count)
            for agent in parse_agents(records)
            if agent.has_location
        ]
        with self._lock:
            self._markers = markers
            self.updates += 1
        logger.debug(f"Agent markers refreshed: {len(markers)} located agents")
        if self._on_change is not None:
            self._on_change(list(markers))

    def latest(self) -> list[dict]:
        with self._lock:
            return list(self._markers)

    def stop(self) -> None:
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
        logger.info("Live agent tracking stopped")
