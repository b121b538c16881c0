import logging

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .view import SalesView
from .form import SaleForm
from .model import SalesTableModel
from ...services import AppServices, DomainError
from ...services.reporting_service import filter_sales
from ...utils.helpers import fmt_money
from ...utils.ui_helpers import error

_log = logging.getLogger(__name__)


class SalesController(BaseModule):
    def __init__(self, services: AppServices):
        super().__init__()
        self.sales = services.sales
        self.store = services.store
        self.view = SalesView()
        self.base_model = SalesTableModel([])
        self.view.table.setModel(self.base_model)
        self.view.btn_new.clicked.connect(self._new_sale)
        self.view.search.textChanged.connect(lambda *_: self.refresh())
        self.store.add_listener(self.refresh)
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def refresh(self):
        rows = filter_sales(self.sales.list_sales(), self.view.search.text())
        self.base_model.replace(rows)
        self.view.lbl_totals.setText(
            f"{len(rows)} sale(s) · revenue {fmt_money(sum(s.total_value for s in rows))}"
            f" · profit {fmt_money(sum(s.profit for s in rows))}"
        )
        self.view.table.resizeColumnsToContents()

    def _new_sale(self):
        dlg = SaleForm(self.view, products=self.store.products, sales=self.store.sales)
        if not dlg.exec():
            return
        data = dlg.payload()
        if not data:
            return
        try:
            self.sales.record_sale(**data)
        except DomainError as e:
            error(self.view, "Sale not recorded", str(e))
