# retail_dashboard/modules/dashboard/controller.py
from __future__ import annotations

import logging

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from ...services import AppServices
from ...services.insights import Insights
from ...services.reporting_service import compute_kpis, revenue_by_date, top_products
from .insights_job import InsightsJob
from .view import DashboardView

_log = logging.getLogger(__name__)


class DashboardController(BaseModule):
    """
    Recomputes KPIs and charts from the store on every change.

    Insights are requested once at start-up and on the Refresh button; they
    are never re-requested automatically after a sale or an edit.
    """

    def __init__(self, services: AppServices) -> None:
        super().__init__()
        self.services = services
        self.store = services.store
        self.view = DashboardView()
        self.insights_job = InsightsJob(services.insights, parent=self)
        self.last_insights = Insights()

        self.view.insights_refresh_requested.connect(self.request_insights)
        self.insights_job.busy_changed.connect(self.view.set_insights_busy)
        self.insights_job.insights_ready.connect(self._on_insights)
        self.store.add_listener(self.refresh)

        self.refresh()
        self.view.set_insights(self.last_insights)

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self) -> None:
        products = self.safe_call(lambda: self.store.products, [])
        sales = self.safe_call(lambda: self.store.sales, [])
        self.view.set_kpis(compute_kpis(products, sales))
        self.view.set_revenue(revenue_by_date(sales))
        self.view.set_top_products(top_products(sales))

    def request_insights(self) -> int:
        return self.insights_job.request(self.store.products, self.store.sales)

    def _on_insights(self, insights: Insights) -> None:
        self.last_insights = insights
        self.view.set_insights(insights)

    def safe_call(self, fn, default):
        try:
            return fn()
        except Exception:
            _log.exception("Dashboard data read failed")
            return default
