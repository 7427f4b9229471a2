"""Loading full collection snapshots from the document store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .records import (
    parse_agents,
    parse_customers,
    parse_orders,
    parse_products,
    parse_territories,
)
from .store import (
    AGENTS,
    COLLECTIONS,
    CUSTOMERS,
    ORDERS,
    PRODUCTS,
    TERRITORIES,
    DocumentStore,
    StoreUnavailableError,
)
from ..models.domain import Agent, Customer, Order, Product, Territory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Snapshot:
    """Point-in-time copy of the collections, normalized into domain objects."""

    agents: tuple[Agent, ...] = field(default_factory=tuple)
    customers: tuple[Customer, ...] = field(default_factory=tuple)
    orders: tuple[Order, ...] = field(default_factory=tuple)
    products: tuple[Product, ...] = field(default_factory=tuple)
    territories: tuple[Territory, ...] = field(default_factory=tuple)

    @classmethod
    def from_collections(cls, raw: Mapping[str, Optional[Mapping[str, Any]]]) -> "Snapshot":
        return cls(
            agents=parse_agents(raw.get(AGENTS)),
            customers=parse_customers(raw.get(CUSTOMERS)),
            orders=parse_orders(raw.get(ORDERS)),
            products=parse_products(raw.get(PRODUCTS)),
            territories=parse_territories(raw.get(TERRITORIES)),
        )


def load_snapshot(store: DocumentStore, collections: Iterable[str] = COLLECTIONS) -> Snapshot:
    """Read every requested collection; unrequested ones stay empty."""

    return Snapshot.from_collections(store.snapshot(tuple(collections)))


def load_snapshot_or_empty(
    store: DocumentStore,
    collections: Iterable[str] = COLLECTIONS,
) -> tuple[Snapshot, Optional[str]]:
    """Like ``load_snapshot`` but degrades to an empty snapshot on store failure.

    Returns the snapshot and an error message (``None`` when the read worked).
    """

    try:
        return load_snapshot(store, collections), None
    except StoreUnavailableError as exc:
        logger.warning(f"Falling back to empty data: {exc}")
        return Snapshot(), str(exc)
