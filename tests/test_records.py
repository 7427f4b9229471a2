from datetime import date, datetime

from backoffice.data.records import (
    agent_from_record,
    customer_from_record,
    order_from_record,
    parse_agents,
    parse_date,
    parse_orders,
)


def test_agent_defaults_are_applied_once():
    agent = agent_from_record("key-1", {"name": "  Ana  "})

    assert agent.id == "key-1"
    assert agent.name == "Ana"
    assert agent.agent_id == ""
    assert agent.status == "active"
    assert agent.sales_target == 50000
    assert agent.total_sales == 0
    assert agent.latitude is None
    assert not agent.has_location


def test_zero_sales_target_falls_back_to_default():
    assert agent_from_record("k", {"sales_target": 0}).sales_target == 50000
    assert agent_from_record("k", {"sales_target": "75,000"}).sales_target == 75000


def test_numeric_strings_and_junk_are_coerced():
    customer = customer_from_record(
        "c1",
        {"total_spent": "1,250.50", "total_orders": "3", "latitude": "14.59", "longitude": "oops", "status": "BLOCKED"},
    )

    assert customer.total_spent == 1250.5
    assert customer.total_orders == 3
    assert customer.latitude == 14.59
    assert customer.longitude is None
    assert customer.status == "blocked"
    assert customer_from_record("c2", {"total_spent": {"nested": 1}}).total_spent == 0
    assert customer_from_record("c3", {"total_spent": True}).total_spent == 0


def test_order_items_from_index_keyed_mapping_keep_their_order():
    order = order_from_record(
        "o1",
        {
            "items": {
                "10": {"product_id": "p10", "quantity": 1, "unit_price": 1},
                "2": {"product_id": "p2", "quantity": 2, "unit_price": 5},
                "0": {"product_id": "p0", "quantity": "3", "unit_price": "50"},
                "1": "not an item",
            },
            "total_amount": "160",
        },
    )

    assert [item.product_id for item in order.items] == ["p0", "p2", "p10"]
    assert order.items[0].subtotal == 150
    assert order.total_amount == 160
    assert order.status == "pending"
    assert order.order_date is None


def test_parse_date_accepts_common_shapes():
    assert parse_date("2024-03-15") == date(2024, 3, 15)
    assert parse_date("2024-03-15T10:30:00Z") == date(2024, 3, 15)
    assert parse_date("2024/03/15") == date(2024, 3, 15)
    assert parse_date("03/15/2024") == date(2024, 3, 15)
    assert parse_date(datetime(2024, 3, 15, 8)) == date(2024, 3, 15)
    assert parse_date("next tuesday") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_collection_parsers_skip_tombstones():
    agents = parse_agents({"a": {"name": "Ana"}, "b": None, "c": "junk"})
    assert [agent.id for agent in agents] == ["a"]
    assert parse_orders(None) == ()
    assert parse_orders({}) == ()
