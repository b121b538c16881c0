import logging
from dataclasses import replace

from PySide6.QtWidgets import QWidget

from ..base_module import BaseModule
from .view import InventoryView
from .form import ProductForm, RestockDialog
from .model import ProductsTableModel
from ...database.repositories.products_repo import Product
from ...services import AppServices, DomainError
from ...services.reporting_service import filter_products
from ...utils.ui_helpers import info, error, confirm

_log = logging.getLogger(__name__)


class InventoryController(BaseModule):
    def __init__(self, services: AppServices):
        super().__init__()
        self.inventory = services.inventory
        self.store = services.store
        self.view = InventoryView()
        self.base_model = ProductsTableModel([])
        self.view.table.setModel(self.base_model)
        self._connect_signals()
        self.store.add_listener(self.refresh)
        self.refresh()

    def get_widget(self) -> QWidget:
        return self.view

    def _connect_signals(self):
        self.view.btn_add.clicked.connect(self._add)
        self.view.btn_edit.clicked.connect(self._edit)
        self.view.btn_restock.clicked.connect(self._restock)
        self.view.btn_delete.clicked.connect(self._delete)
        self.view.search.textChanged.connect(lambda *_: self.refresh())

    def refresh(self):
        rows = filter_products(self.inventory.list_products(), self.view.search.text())
        self.base_model.replace(rows)
        self.view.table.resizeColumnsToContents()

    def _selected(self) -> Product | None:
        sm = self.view.table.selectionModel()
        idxs = sm.selectedRows() if sm else []
        if not idxs:
            return None
        return self.base_model.at(idxs[0].row())

    def _add(self):
        dlg = ProductForm(self.view)
        if not dlg.exec():
            return
        data = dlg.payload()
        if not data:
            return
        try:
            p = self.inventory.add_product(data)
        except DomainError as e:
            error(self.view, "Invalid product", str(e))
            return
        info(self.view, "Saved", f"Product '{p.name}' created.")

    def _edit(self):
        current = self._selected()
        if current is None:
            info(self.view, "Select", "Please select a product to edit.")
            return
        dlg = ProductForm(self.view, initial=current)
        if not dlg.exec():
            return
        data = dlg.payload()
        if not data:
            return
        try:
            self.inventory.update_product(replace(current, **data))
        except DomainError as e:
            error(self.view, "Not saved", str(e))

    def _restock(self):
        current = self._selected()
        if current is None:
            info(self.view, "Select", "Please select a product to restock.")
            return
        dlg = RestockDialog(self.view, product=current)
        if not dlg.exec():
            return
        data = dlg.payload()
        if not data:
            return
        try:
            self.inventory.restock(current.product_id, data["quantity"], data["unit_cost"])
        except DomainError as e:
            error(self.view, "Restock failed", str(e))

    def _delete(self):
        current = self._selected()
        if current is None:
            info(self.view, "Select", "Please select a product to delete.")
            return
        if not confirm(
            self.view,
            "Delete product",
            f"Delete '{current.name}'? Its past sales are kept.",
        ):
            return
        try:
            self.inventory.delete_product(current.product_id)
        except DomainError as e:
            error(self.view, "Delete failed", str(e))
