# retail_dashboard/services/reporting_service.py
from __future__ import annotations

"""
Derived views for the dashboard and the ledgers.

Everything here is a pure function of the current products/sales lists:
nothing is cached, calling twice with the same input gives the same output.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List

from ..constants import REVENUE_CHART_DAYS, TOP_PRODUCTS_LIMIT
from ..database.repositories.products_repo import Product
from ..database.repositories.sales_repo import Sale


# ---------------------------- Result types ----------------------------

@dataclass(frozen=True)
class Kpis:
    total_revenue: float
    total_profit: float
    low_stock_count: int
    total_items_sold: int


@dataclass(frozen=True)
class RevenuePoint:
    day: date
    label: str      # dd/mm, or dd/mm/yy across years
    value: float


@dataclass(frozen=True)
class TopProduct:
    name: str
    quantity: int


@dataclass
class CustomerStats:
    name: str
    total_purchases: int = 0
    total_items_bought: int = 0
    total_spent: float = 0.0
    total_profit_given: float = 0.0
    last_purchase_date: str = ""  # ISO timestamp of the latest sale


# ---------------------------- KPIs ----------------------------

def compute_kpis(products: Iterable[Product], sales: Iterable[Sale]) -> Kpis:
    sales = list(sales)
    return Kpis(
        total_revenue=sum(s.total_value for s in sales),
        total_profit=sum(s.profit for s in sales),
        low_stock_count=sum(1 for p in products if p.is_low_stock),
        total_items_sold=sum(s.quantity for s in sales),
    )


# ---------------------------- Charts ----------------------------

def revenue_by_date(sales: Iterable[Sale], limit: int = REVENUE_CHART_DAYS) -> List[RevenuePoint]:
    """
    Revenue per calendar day, oldest first, restricted to the `limit` most
    recent days that actually have sales (not a fixed calendar window).
    """
    totals: Dict[date, float] = {}
    for s in sales:
        day = s.timestamp.date()
        totals[day] = totals.get(day, 0.0) + s.total_value
    days = sorted(totals)[-limit:] if limit > 0 else []
    # dd/mm, with the year added once the window crosses a new year
    fmt = "%d/%m" if len({d.year for d in days}) <= 1 else "%d/%m/%y"
    return [RevenuePoint(d, d.strftime(fmt), totals[d]) for d in days]


def top_products(sales: Iterable[Sale], limit: int = TOP_PRODUCTS_LIMIT) -> List[TopProduct]:
    """Units sold per product name, best sellers first; ties keep first-seen order."""
    qty: Dict[str, int] = {}
    for s in sales:
        qty[s.product_name] = qty.get(s.product_name, 0) + s.quantity
    ranked = sorted(qty.items(), key=lambda kv: kv[1], reverse=True)
    return [TopProduct(name, q) for name, q in ranked[:limit]]


# ---------------------------- Customers ----------------------------

def customer_stats(sales: Iterable[Sale]) -> List[CustomerStats]:
    """One row per customer name, biggest spenders first."""
    stats: Dict[str, CustomerStats] = {}
    latest: Dict[str, datetime] = {}
    for s in sales:
        c = stats.get(s.customer_name)
        if c is None:
            c = stats[s.customer_name] = CustomerStats(name=s.customer_name, last_purchase_date=s.date)
            latest[s.customer_name] = s.timestamp
        c.total_purchases += 1
        c.total_items_bought += s.quantity
        c.total_spent += s.total_value
        c.total_profit_given += s.profit
        ts = s.timestamp
        if ts > latest[s.customer_name]:
            latest[s.customer_name] = ts
            c.last_purchase_date = s.date
    return sorted(stats.values(), key=lambda c: c.total_spent, reverse=True)


# ---------------------------- List filters ----------------------------

def filter_products(products: Iterable[Product], term: str) -> List[Product]:
    t = (term or "").strip().lower()
    return [p for p in products if not t or t in p.name.lower() or t in (p.category or "").lower()]


def filter_sales(sales: Iterable[Sale], term: str) -> List[Sale]:
    """Matching sales (customer or product name), newest first."""
    t = (term or "").strip().lower()
    hits = [
        s for s in sales
        if not t or t in s.customer_name.lower() or t in s.product_name.lower()
    ]
    return sorted(hits, key=lambda s: s.timestamp, reverse=True)


def filter_customers(stats: Iterable[CustomerStats], term: str) -> List[CustomerStats]:
    t = (term or "").strip().lower()
    return [c for c in stats if not t or t in c.name.lower()]
