"""Document store access: Supabase-backed, with an in-memory fallback."""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from functools import lru_cache
from typing import Any, Callable, Iterable, Protocol

from postgrest.exceptions import APIError

from ..db.supabase import get_supabase_client
from ..config import settings

logger = logging.getLogger(__name__)

AGENTS = "agents"
CUSTOMERS = "customers"
ORDERS = "orders"
PRODUCTS = "products"
TERRITORIES = "territories"
COLLECTIONS = (AGENTS, CUSTOMERS, ORDERS, PRODUCTS, TERRITORIES)

# PostgREST/Postgres codes reported for a table that does not exist
_MISSING_TABLE_CODES = {"42P01", "PGRST205"}

Collection = dict[str, dict[str, Any]]
UpdateCallback = Callable[[Collection], None]


class StoreUnavailableError(RuntimeError):
    """Raised when the document store cannot be reached."""


class RecordNotFoundError(LookupError):
    """Raised when a keyed record does not exist in its collection."""

    def __init__(self, collection: str, key: str) -> None:
        super().__init__(f"{collection} record '{key}' not found")
        self.collection = collection
        self.key = key


class Subscription:
    """Handle returned by ``subscribe``; call ``cancel`` to stop updates."""

    def __init__(self, on_cancel: Callable[[], None]) -> None:
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._on_cancel()


class DocumentStore(Protocol):
    def get_all(self, collection: str) -> Collection: ...

    def get(self, collection: str, key: str) -> dict[str, Any] | None: ...

    def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]: ...

    def update(self, collection: str, key: str, partial: dict[str, Any]) -> dict[str, Any]: ...

    def delete(self, collection: str, key: str) -> str: ...

    def snapshot(self, collections: Iterable[str] = COLLECTIONS) -> dict[str, Collection]: ...

    def subscribe(self, collection: str, on_update: UpdateCallback) -> Subscription: ...


def new_key() -> str:
    return uuid.uuid4().hex


class InMemoryStore:
    """Dict-backed store used for local development and tests.

    Subscribers receive a full copy of the collection right away and again
    after every write to it.
    """

    def __init__(self, data: dict[str, Collection] | None = None) -> None:
        self._data: dict[str, Collection] = copy.deepcopy(data) if data else {}
        self._subscribers: dict[str, list[UpdateCallback]] = {}
        self._lock = threading.RLock()

    def get_all(self, collection: str) -> Collection:
        with self._lock:
            return copy.deepcopy(self._data.get(collection, {}))

    def get(self, collection: str, key: str) -> dict[str, Any] | None:
        with self._lock:
            record = self._data.get(collection, {}).get(key)
            return copy.deepcopy(record) if record is not None else None

    def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        stored = dict(record)
        stored["id"] = str(stored.get("id") or new_key())
        with self._lock:
            self._data.setdefault(collection, {})[stored["id"]] = copy.deepcopy(stored)
        self._notify(collection)
        return stored

    def update(self, collection: str, key: str, partial: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            records = self._data.get(collection, {})
            if key not in records:
                raise RecordNotFoundError(collection, key)
            records[key].update(copy.deepcopy(partial))
            updated = copy.deepcopy(records[key])
        self._notify(collection)
        return updated

    def delete(self, collection: str, key: str) -> str:
        with self._lock:
            records = self._data.get(collection, {})
            if key not in records:
                raise RecordNotFoundError(collection, key)
            del records[key]
        self._notify(collection)
        return key

    def snapshot(self, collections: Iterable[str] = COLLECTIONS) -> dict[str, Collection]:
        return {name: self.get_all(name) for name in collections}

    def subscribe(self, collection: str, on_update: UpdateCallback) -> Subscription:
        with self._lock:
            self._subscribers.setdefault(collection, []).append(on_update)

        def _remove() -> None:
            with self._lock:
                callbacks = self._subscribers.get(collection, [])
                if on_update in callbacks:
                    callbacks.remove(on_update)

        on_update(self.get_all(collection))
        return Subscription(_remove)

    def _notify(self, collection: str) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(collection, []))
        if not callbacks:
            return
        for callback in callbacks:
            callback(self.get_all(collection))


class SupabaseStore:
    """Collections stored as Supabase tables keyed by a text ``id`` column."""

    def __init__(self, client: Any, poll_seconds: float | None = None) -> None:
        self._client = client
        self.poll_seconds = poll_seconds if poll_seconds is not None else settings.subscription_poll_seconds

    def get_all(self, collection: str) -> Collection:
        try:
            response = self._client.table(collection).select("*").execute()
        except APIError as exc:
            if exc.code in _MISSING_TABLE_CODES:
                logger.debug(f"Collection '{collection}' does not exist; treating as empty")
                return {}
            raise StoreUnavailableError(f"Failed to read '{collection}': {exc.message}") from exc
        except Exception as exc:
            raise StoreUnavailableError(f"Failed to read '{collection}': {exc}") from exc
        return {str(row["id"]): row for row in (response.data or []) if row.get("id") is not None}

    def get(self, collection: str, key: str) -> dict[str, Any] | None:
        try:
            response = self._client.table(collection).select("*").eq("id", key).limit(1).execute()
        except APIError as exc:
            if exc.code in _MISSING_TABLE_CODES:
                return None
            raise StoreUnavailableError(f"Failed to read '{collection}/{key}': {exc.message}") from exc
        except Exception as exc:
            raise StoreUnavailableError(f"Failed to read '{collection}/{key}': {exc}") from exc
        rows = response.data or []
        return rows[0] if rows else None

    def create(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        stored = dict(record)
        stored["id"] = str(stored.get("id") or new_key())
        response = self._execute(collection, lambda table: table.insert(stored))
        rows = response.data or []
        return rows[0] if rows else stored

    def update(self, collection: str, key: str, partial: dict[str, Any]) -> dict[str, Any]:
        response = self._execute(collection, lambda table: table.update(partial).eq("id", key))
        rows = response.data or []
        if not rows:
            raise RecordNotFoundError(collection, key)
        return rows[0]

    def delete(self, collection: str, key: str) -> str:
        response = self._execute(collection, lambda table: table.delete().eq("id", key))
        if not response.data:
            raise RecordNotFoundError(collection, key)
        return key

    def snapshot(self, collections: Iterable[str] = COLLECTIONS) -> dict[str, Collection]:
        return {name: self.get_all(name) for name in collections}

    def subscribe(self, collection: str, on_update: UpdateCallback) -> Subscription:
        """Poll the table and emit the whole collection whenever it changes."""

        stop = threading.Event()

        def _poll() -> None:
            last: Collection | None = None
            while not stop.is_set():
                try:
                    current = self.get_all(collection)
                except StoreUnavailableError as exc:
                    logger.warning(f"Subscription poll for '{collection}' failed: {exc}")
                else:
                    if current != last:
                        last = current
                        on_update(copy.deepcopy(current))
                stop.wait(self.poll_seconds)

        worker = threading.Thread(target=_poll, name=f"subscription-{collection}", daemon=True)
        worker.start()
        return Subscription(stop.set)

    def _execute(self, collection: str, build: Callable[[Any], Any]) -> Any:
        try:
            return build(self._client.table(collection)).execute()
        except APIError as exc:
            raise StoreUnavailableError(f"Write to '{collection}' failed: {exc.message}") from exc
        except Exception as exc:
            raise StoreUnavailableError(f"Write to '{collection}' failed: {exc}") from exc


@lru_cache()
def get_store() -> DocumentStore:
    """Return the configured store; in-memory when Supabase is not configured."""

    client = get_supabase_client()
    if client is None:
        logger.warning("Supabase not configured - using a process-local in-memory store")
        return InMemoryStore()
    return SupabaseStore(client)
