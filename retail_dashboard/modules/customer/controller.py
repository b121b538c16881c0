from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .view import CustomerView
from .model import CustomerStatsTableModel
from ...services import AppServices
from ...services.reporting_service import customer_stats, filter_customers


class CustomerController(BaseModule):
    """Read-only ledger: customers exist only through their sales."""

    def __init__(self, services: AppServices):
        super().__init__()
        self.store = services.store
        self.view = CustomerView()
        self.base_model = CustomerStatsTableModel([])
        self.view.table.setModel(self.base_model)
        self.view.search.textChanged.connect(lambda *_: self.refresh())
        self.store.add_listener(self.refresh)
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self):
        rows = filter_customers(customer_stats(self.store.sales), self.view.search.text())
        self.base_model.replace(rows)
        self.view.table.resizeColumnsToContents()
