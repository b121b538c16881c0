"""
Retail dashboard: products, sales, customers and KPIs for a single shop.

Entry point: ``python -m retail_dashboard.main`` (or the ``retail-dashboard`` script).
"""

__version__ = "1.0.0"
