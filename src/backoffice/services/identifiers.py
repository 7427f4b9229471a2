"""Sequential human-readable codes (``BIGD-0007``, ``CUST-0123``)."""

from __future__ import annotations

import logging
import re
import threading
import time
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from ..config import settings
from ..data.store import DocumentStore

logger = logging.getLogger(__name__)

_allocation_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _code_of(record: Any, field: str) -> str:
    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    return value if isinstance(value, str) else ""


def highest_sequence(records: Mapping[str, Any] | Iterable[Any] | None, prefix: str, *, field: str) -> int:
    """Return the largest numeric suffix among codes shaped ``PREFIX-<digits>``."""

    if not records:
        return 0
    values = records.values() if isinstance(records, Mapping) else records
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    highest = 0
    for record in values:
        match = pattern.match(_code_of(record, field))
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def format_code(prefix: str, number: int, width: Optional[int] = None) -> str:
    # zero-fill pads short numbers and never truncates long ones
    return f"{prefix}-{str(number).zfill(width or settings.code_width)}"


def next_code(
    records: Mapping[str, Any] | Iterable[Any] | None,
    prefix: str,
    *,
    field: str,
    width: Optional[int] = None,
) -> str:
    """Compute the next unused code for ``prefix`` from a snapshot of records.

    Codes that do not match ``PREFIX-<digits>`` are ignored. An empty
    snapshot yields ``PREFIX-0001``.
    """

    return format_code(prefix, highest_sequence(records, prefix, field=field) + 1, width)


def next_agent_code(agents: Mapping[str, Any] | Iterable[Any] | None) -> str:
    return next_code(agents, settings.agent_code_prefix, field="agent_id")


def next_customer_code(customers: Mapping[str, Any] | Iterable[Any] | None) -> str:
    return next_code(customers, settings.customer_code_prefix, field="customer_id")


def next_order_code(now_ms: Optional[int] = None) -> str:
    """Order codes use the last six digits of the epoch millisecond clock."""

    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{settings.order_code_prefix}-{str(millis)[-6:]}"


def _lock_for(prefix: str) -> threading.Lock:
    with _locks_guard:
        return _allocation_locks.setdefault(prefix, threading.Lock())


def allocate_and_create(
    store: DocumentStore,
    collection: str,
    record: dict[str, Any],
    *,
    prefix: str,
    field: str,
) -> dict[str, Any]:
    """Assign the next code to ``record`` and persist it.

    Allocation and write are serialized per prefix inside this process. After
    the write the collection is re-read; when another record already carries
    the same code (a concurrent writer elsewhere), this record is re-coded.
    """

    with _lock_for(prefix):
        existing = store.get_all(collection)
        payload = dict(record)
        payload[field] = next_code(existing, prefix, field=field)
        created = store.create(collection, payload)
        key = str(created["id"])

        retries = settings.code_allocation_retries
        for attempt in range(retries + 1):
            current = store.get_all(collection)
            # the record with the smaller key keeps a contested code
            clashes = sorted(
                other_key
                for other_key, other in current.items()
                if other_key < key and _code_of(other, field) == created[field]
            )
            if not clashes:
                break
            if attempt == retries:
                logger.error(f"Could not settle a unique {prefix} code for {collection}/{key}")
                break
            replacement = next_code(current, prefix, field=field)
            logger.warning(
                f"Code {created[field]} in '{collection}' is also held by {clashes}; "
                f"re-coding {key} as {replacement} (attempt {attempt + 1})"
            )
            created = store.update(collection, key, {field: replacement})
        return created
