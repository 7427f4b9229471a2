import threading

from backoffice.data.store import AGENTS, InMemoryStore
from backoffice.services import identifiers
from backoffice.services.identifiers import (
    allocate_and_create,
    format_code,
    highest_sequence,
    next_agent_code,
    next_code,
    next_customer_code,
    next_order_code,
)


def _agents(*codes: str) -> dict:
    return {f"k{index}": {"agent_id": code, "name": f"Agent {index}"} for index, code in enumerate(codes)}


def test_next_code_continues_after_highest_with_gaps():
    codes = [f"BIGD-{number:04d}" for number in range(1, 43) if number not in (7, 19, 30)]
    assert next_code(_agents(*codes), "BIGD", field="agent_id") == "BIGD-0043"


def test_next_code_for_empty_collection_starts_at_one():
    assert next_code({}, "BIGD", field="agent_id") == "BIGD-0001"
    assert next_code(None, "CUST", field="customer_id") == "CUST-0001"


def test_foreign_and_malformed_codes_are_ignored():
    records = _agents("OLD-9999", "BIGD-12a", "bigd-0050", "", "BIGD-")
    records["k9"] = {"name": "No code at all"}
    assert next_code(records, "BIGD", field="agent_id") == "BIGD-0001"


def test_deleted_top_code_is_reissued_but_inner_gaps_are_not():
    records = _agents("BIGD-0001", "BIGD-0002", "BIGD-0003")
    del records["k2"]
    assert next_agent_code(records) == "BIGD-0003"
    del records["k0"]
    assert next_agent_code(records) == "BIGD-0003"


def test_code_width_pads_but_never_truncates():
    assert format_code("BIGD", 7) == "BIGD-0007"
    assert format_code("BIGD", 12345) == "BIGD-12345"
    assert next_code(_agents("BIGD-9999"), "BIGD", field="agent_id") == "BIGD-10000"
    assert next_code(_agents("BIGD-10000"), "BIGD", field="agent_id") == "BIGD-10001"


def test_highest_sequence_accepts_objects_and_lists():
    class Row:
        def __init__(self, customer_id):
            self.customer_id = customer_id

    rows = [Row("CUST-0004"), Row("CUST-0011"), Row(None)]
    assert highest_sequence(rows, "CUST", field="customer_id") == 11
    assert next_customer_code(rows) == "CUST-0012"


def test_prefix_with_regex_characters_is_matched_literally():
    records = [{"code": "A.B-0003"}, {"code": "AXB-0009"}]
    assert next_code(records, "A.B", field="code") == "A.B-0004"


def test_next_order_code_uses_last_six_clock_digits():
    assert next_order_code(now_ms=1_700_000_123_456) == "ORD-123456"


def test_allocate_and_create_assigns_sequential_codes():
    store = InMemoryStore({AGENTS: {"a": {"id": "a", "agent_id": "BIGD-0041"}}})

    first = allocate_and_create(store, AGENTS, {"name": "Ana"}, prefix="BIGD", field="agent_id")
    second = allocate_and_create(store, AGENTS, {"name": "Ben"}, prefix="BIGD", field="agent_id")

    assert first["agent_id"] == "BIGD-0042"
    assert second["agent_id"] == "BIGD-0043"
    assert store.get(AGENTS, first["id"])["agent_id"] == "BIGD-0042"


def test_allocate_and_create_recodes_when_another_writer_took_the_code(monkeypatch):
    store = InMemoryStore()
    original_create = store.create

    def racing_create(collection, record):
        # another process writes the same code just before us
        if not store.get_all(collection):
            original_create(collection, {"id": "0-other", "agent_id": record["agent_id"], "name": "Elsewhere"})
        return original_create(collection, dict(record, id="z-mine"))

    monkeypatch.setattr(store, "create", racing_create)

    created = allocate_and_create(store, AGENTS, {"name": "Mine"}, prefix="BIGD", field="agent_id")

    assert created["agent_id"] == "BIGD-0002"
    assert store.get(AGENTS, "0-other")["agent_id"] == "BIGD-0001"
    assert store.get(AGENTS, "z-mine")["agent_id"] == "BIGD-0002"


def test_concurrent_allocations_in_one_process_never_share_a_code():
    store = InMemoryStore()
    results = []

    def worker(index):
        results.append(
            allocate_and_create(store, AGENTS, {"name": f"Agent {index}"}, prefix="BIGD", field="agent_id")
        )

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    codes = sorted(record["agent_id"] for record in store.get_all(AGENTS).values())
    assert codes == [f"BIGD-{number:04d}" for number in range(1, 9)]
    assert len(results) == 8


def test_allocation_locks_are_per_prefix():
    assert identifiers._lock_for("BIGD") is identifiers._lock_for("BIGD")
    assert identifiers._lock_for("BIGD") is not identifiers._lock_for("CUST")


def test_codes_with_surrounding_whitespace_are_ignored():
    assert next_code(_agents(" BIGD-0050 ", "BIGD-0050\n"), "BIGD", field="agent_id") == "BIGD-0001"
    assert next_code(_agents(" BIGD-0050", "BIGD-0002"), "BIGD", field="agent_id") == "BIGD-0003"
