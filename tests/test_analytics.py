from datetime import date

from backoffice.data.repository import Snapshot
from backoffice.models.domain import Agent, Customer, Order, OrderItem, Product, Territory
from backoffice.services.analytics import (
    agent_performance,
    agent_performance_detail,
    customer_rebates,
    dashboard_summary,
    entity_counts,
    monthly_revenue,
    performance_percentage,
    product_sales_ranking,
    products_sold,
    reports_summary,
    top_customers,
    total_revenue,
)


def _agent(key: str, name: str = "", target: float = 50000) -> Agent:
    return Agent(
        id=key,
        agent_id=f"BIGD-{key}",
        name=name or f"Agent {key}",
        email="",
        contact="",
        area_covered="",
        status="active",
        sales_target=target,
        customers_count=0,
        total_sales=0,
    )


def _customer(key: str, spent: float = 0, agent: str = "", name: str = "") -> Customer:
    return Customer(
        id=key,
        customer_id=f"CUST-{key}",
        name=name or f"Customer {key}",
        email="",
        contact="",
        location="",
        agent_id=agent,
        status="active",
        total_spent=spent,
        total_orders=0,
    )


def _order(key: str, amount: float, agent: str = "", order_date: date | None = date(2024, 1, 10), items=()) -> Order:
    return Order(
        id=key,
        order_id=f"ORD-{key}",
        customer_id="c1",
        customer_name="Customer c1",
        agent_id=agent,
        order_date=order_date,
        total_amount=amount,
        status="completed",
        items=tuple(items),
    )


def _item(product: str, quantity: float, price: float) -> OrderItem:
    return OrderItem(product_id=product, product_name="", quantity=quantity, unit_price=price)


def test_monthly_buckets_sum_to_dated_total():
    orders = [
        _order("1", 100, order_date=date(2024, 1, 5)),
        _order("2", 250, order_date=date(2023, 1, 20)),
        _order("3", 75, order_date=date(2024, 12, 31)),
        _order("4", 999, order_date=None),
    ]
    buckets = monthly_revenue(orders)

    assert [bucket["name"] for bucket in buckets][:3] == ["Jan", "Feb", "Mar"]
    assert len(buckets) == 12
    assert buckets[0]["total"] == 350
    assert buckets[11]["total"] == 75
    assert sum(bucket["total"] for bucket in buckets) == 425
    assert total_revenue(orders) == 1424


def test_empty_inputs_give_zeroed_results():
    assert total_revenue(None) == 0
    assert all(bucket["total"] == 0 for bucket in monthly_revenue([]))
    assert top_customers([]) == []
    assert customer_rebates(None) == []
    assert product_sales_ranking([], []) == []
    assert agent_performance([], []) == []


def test_top_customers_is_deterministic_and_limited():
    customers = [
        _customer("a", 500),
        _customer("b", 900),
        _customer("c", 500),
        _customer("d", 100),
        _customer("e", 50),
        _customer("f", 700),
    ]
    first = top_customers(customers, limit=5)
    second = top_customers(customers, limit=5)

    assert first == second
    assert [row["id"] for row in first] == ["b", "f", "a", "c", "d"]


def test_rebates_are_ten_percent_and_skip_zero_spenders():
    rows = customer_rebates([_customer("a", 10000), _customer("b", 0), _customer("c", 2500)])

    assert rows[0] == {"id": "a", "name": "Customer a", "purchases": 10000, "rebate": 1000}
    assert rows[1]["rebate"] == 250
    assert [row["id"] for row in rows] == ["a", "c"]


def test_performance_is_capped_and_met_target_uses_raw_sales():
    agents = [_agent("a1", target=50000), _agent("a2", target=50000)]
    orders = [_order("1", 75000, agent="a1"), _order("2", 24999, agent="a2")]
    rows = {row["id"]: row for row in agent_performance(agents, orders)}

    assert rows["a1"]["performancePercentage"] == 100
    assert rows["a1"]["metTarget"] is True
    assert rows["a2"]["performancePercentage"] == 50
    assert rows["a2"]["metTarget"] is False


def test_performance_percentage_rounds_half_up():
    assert performance_percentage(125, 1000) == 13
    assert performance_percentage(124, 1000) == 12
    assert performance_percentage(0, 50000) == 0
    assert performance_percentage(10, 0) == 100


def test_zero_target_uses_default():
    agent = _agent("a1", target=0)
    rows = agent_performance([agent], [_order("1", 25000, agent="a1")])
    assert rows[0]["target"] == 50000
    assert rows[0]["performancePercentage"] == 50


def test_scope_limits_every_aggregate():
    orders = [_order("1", 100, agent="A"), _order("2", 200, agent="B")]

    assert total_revenue(orders, "A") == 100
    assert total_revenue(orders) == 300
    assert total_revenue(orders, "  ") == 300
    assert [row["id"] for row in agent_performance([_agent("A"), _agent("B")], orders, "A")] == ["A"]


def test_product_sales_ranking_values_line_items():
    orders = [_order("1", 150, items=[_item("p1", 3, 50)])]
    assert product_sales_ranking(orders, [Product(id="p1", name="Widget", price=50, sku="W")]) == [
        {"product_id": "p1", "name": "Widget", "sales": 150}
    ]


def test_product_sales_ranking_handles_dangling_and_empty_items():
    orders = [
        _order("1", 0, items=[_item("gone", 2, 10), _item("", 5, 10), _item("p1", 0, 10), _item("p2", 1, 0)]),
        _order("2", 0, items=[_item("p3", 1, 5)]),
    ]
    ranking = product_sales_ranking(orders, [Product(id="p3", name="Bolt", price=5, sku="")])

    assert ranking == [
        {"product_id": "gone", "name": "Unknown Product", "sales": 20},
        {"product_id": "p3", "name": "Bolt", "sales": 5},
    ]
    assert products_sold(orders) == 9


def test_agent_performance_detail_collects_monthly_sales():
    agent = _agent("a1", target=1000)
    orders = [
        _order("1", 300, agent="a1", order_date=date(2024, 2, 1)),
        _order("2", 200, agent="a1", order_date=None),
        _order("3", 900, agent="other"),
    ]
    detail = agent_performance_detail(agent, orders, [_customer("c1", agent="a1"), _customer("c2")])

    assert detail["monthlySales"][1] == {"name": "Feb", "sales": 300}
    assert detail["totalSales"] == 500
    assert detail["performancePercentage"] == 50
    assert detail["customerCount"] == 1
    assert detail["orderCount"] == 2


def test_dashboard_and_reports_respect_scope():
    snapshot = Snapshot(
        agents=(_agent("A"), _agent("B")),
        customers=(_customer("c1", 400, agent="A"), _customer("c2", 800, agent="B")),
        orders=(_order("1", 100, agent="A", items=[_item("p1", 2, 50)]), _order("2", 200, agent="B")),
        products=(Product(id="p1", name="Widget", price=50, sku=""),),
        territories=(Territory(id="t1", name="North", agent_id="A", description=""),),
    )

    scoped_view = dashboard_summary(snapshot, "A")
    admin_view = dashboard_summary(snapshot)

    assert scoped_view["totalRevenue"] == 100
    assert admin_view["totalRevenue"] == 300
    assert scoped_view["counts"] == {"agents": 1, "customers": 1, "orders": 1, "products": 1, "territories": 1}
    assert entity_counts(snapshot)["agents"] == 2
    assert [row["id"] for row in scoped_view["topCustomers"]] == ["c1"]

    report = reports_summary(snapshot, "A")
    assert report["scope"] == "A"
    assert [row["id"] for row in report["customerRebates"]] == ["c1"]
    assert report["productSales"] == [{"product_id": "p1", "name": "Widget", "sales": 100}]
