from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QDateTime
from PySide6.QtWidgets import (
    QComboBox, QDateTimeEdit, QDialog, QDialogButtonBox, QFormLayout, QLabel,
    QLineEdit, QVBoxLayout,
)

from ...database.repositories.products_repo import Product
from ...database.repositories.sales_repo import Sale
from ...services.sales_service import max_price_sold, projected_profit
from ...utils.helpers import fmt_money
from ...utils.validators import is_non_negative_number, non_empty, try_parse_float, try_parse_int


class SaleForm(QDialog):
    """
    New sale entry.

    Picking a product pre-fills its suggested price and shows the minimum
    margin price and the highest price it was ever sold for. The projected
    profit follows quantity and price as they are typed. Stock is checked
    here for feedback only; the sales service enforces it.
    """

    def __init__(self, parent=None, products: List[Product] = (), sales: List[Sale] = ()):
        super().__init__(parent)
        self.setWindowTitle("New Sale")
        self.setModal(True)
        self._products = list(products)
        self._sales = list(sales)
        self._payload = None

        self.product = QComboBox()
        self.product.addItem("Select a product…", None)
        for p in self._products:
            self.product.addItem(f"{p.name} (stock {p.current_stock})", p.product_id)
        self.customer = QLineEdit()
        self.quantity = QLineEdit("1")
        self.price = QLineEdit()
        self.date = QDateTimeEdit(QDateTime.currentDateTime())
        self.date.setCalendarPopup(True)
        self.date.setDisplayFormat("dd/MM/yyyy HH:mm")

        self.lbl_cost = QLabel("")
        self.lbl_min_margin = QLabel("")
        self.lbl_max_sold = QLabel("")
        self.lbl_profit = QLabel("")
        self.lbl_error = QLabel("")
        self.lbl_error.setStyleSheet("color: #c62828;")

        form = QFormLayout()
        form.addRow("Product*", self.product)
        form.addRow("Customer*", self.customer)
        form.addRow("Quantity*", self.quantity)
        form.addRow("Unit price*", self.price)
        form.addRow("Date", self.date)
        form.addRow("Current cost", self.lbl_cost)
        form.addRow("Min. margin price", self.lbl_min_margin)
        form.addRow("Highest price sold", self.lbl_max_sold)
        form.addRow("Projected profit", self.lbl_profit)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self.lbl_error)
        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self.product.currentIndexChanged.connect(self._on_product_changed)
        self.quantity.textChanged.connect(self._update_profit)
        self.price.textChanged.connect(self._update_profit)

    def selected_product(self) -> Optional[Product]:
        pid = self.product.currentData()
        return next((p for p in self._products if p.product_id == pid), None)

    def select_product(self, product_id: str) -> None:
        i = self.product.findData(product_id)
        if i >= 0:
            self.product.setCurrentIndex(i)

    def _on_product_changed(self, *_):
        p = self.selected_product()
        if p is None:
            for lbl in (self.lbl_cost, self.lbl_min_margin, self.lbl_max_sold, self.lbl_profit):
                lbl.setText("")
            return
        self.price.setText(f"{p.suggested_price:.2f}")
        self.lbl_cost.setText(fmt_money(p.cost_price))
        self.lbl_min_margin.setText(fmt_money(p.min_margin_price))
        top = max_price_sold(self._sales, p.product_id)
        self.lbl_max_sold.setText(fmt_money(top) if top > 0 else "never sold")
        self._update_profit()

    def _update_profit(self, *_):
        p = self.selected_product()
        ok_q, qty = try_parse_int(self.quantity.text())
        ok_p, price = try_parse_float(self.price.text())
        if p is None or not (ok_q and ok_p) or qty is None or price is None:
            self.lbl_profit.setText("")
            return
        profit = projected_profit(p, qty, price)
        self.lbl_profit.setText(fmt_money(profit))
        self.lbl_profit.setStyleSheet("color: #c62828;" if profit < 0 else "color: #2e7d32;")

    def _fail(self, widget, msg: str):
        self.lbl_error.setText(msg)
        widget.setFocus()
        return None

    def get_payload(self) -> dict | None:
        p = self.selected_product()
        if p is None:
            return self._fail(self.product, "Select a product.")
        if not non_empty(self.customer.text()):
            return self._fail(self.customer, "Customer name is required.")
        ok, qty = try_parse_int(self.quantity.text())
        if not ok or qty is None or qty < 1:
            return self._fail(self.quantity, "Quantity must be a whole number ≥ 1.")
        if qty > p.current_stock:
            return self._fail(self.quantity, f"Only {p.current_stock} in stock.")
        if not is_non_negative_number(self.price.text()):
            return self._fail(self.price, "Unit price must be a non-negative number.")
        self.lbl_error.setText("")
        return {
            "product_id": p.product_id,
            "customer_name": self.customer.text().strip(),
            "quantity": qty,
            "unit_sale_price": try_parse_float(self.price.text())[1],
            "sale_date": self.date.dateTime().toPython(),
        }

    def accept(self):
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self):
        return self._payload
