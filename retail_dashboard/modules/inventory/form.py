from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QLabel, QLineEdit, QVBoxLayout,
)

from ...database.repositories.products_repo import Product
from ...services.inventory_service import weighted_average_cost
from ...utils.helpers import fmt_money
from ...utils.validators import (
    is_non_negative_number, non_empty, try_parse_float, try_parse_int,
)


class ProductForm(QDialog):
    """
    Create/edit a product. Stock counters are whole numbers, prices are
    non-negative. `payload()` is a dict of Product fields (no id).
    """

    def __init__(self, parent=None, initial: Product | None = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Product" if initial else "New Product")
        self.setModal(True)
        self._payload = None
        self._initial = initial

        self.name = QLineEdit()
        self.category = QLineEdit()
        self.cost_price = QLineEdit()
        self.cost_price.setPlaceholderText("0.00")
        self.suggested_price = QLineEdit()
        self.suggested_price.setPlaceholderText("0.00")
        self.current_stock = QLineEdit()
        self.current_stock.setPlaceholderText("0")
        self.min_stock = QLineEdit()
        self.min_stock.setPlaceholderText("0")
        self.lbl_min_margin = QLabel("")
        self.lbl_error = QLabel("")
        self.lbl_error.setStyleSheet("color: #c62828;")

        form = QFormLayout()
        form.addRow("Name*", self.name)
        form.addRow("Category", self.category)
        form.addRow("Cost price*", self.cost_price)
        form.addRow("Suggested price*", self.suggested_price)
        form.addRow("Min. margin price", self.lbl_min_margin)
        form.addRow("Current stock*", self.current_stock)
        form.addRow("Minimum stock*", self.min_stock)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self.lbl_error)
        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

        if initial:
            self.name.setText(initial.name)
            self.category.setText(initial.category or "")
            self.cost_price.setText(f"{initial.cost_price:.2f}")
            self.suggested_price.setText(f"{initial.suggested_price:.2f}")
            self.current_stock.setText(str(initial.current_stock))
            self.min_stock.setText(str(initial.min_stock))

        self.cost_price.textChanged.connect(self._update_min_margin)
        self._update_min_margin()

    def _update_min_margin(self, *_):
        ok, cost = try_parse_float(self.cost_price.text())
        if ok and cost is not None and cost >= 0:
            preview = Product("", "", "", cost, 0.0, 0, 0)
            self.lbl_min_margin.setText(fmt_money(preview.min_margin_price))
        else:
            self.lbl_min_margin.setText("")

    def _fail(self, widget, msg: str):
        self.lbl_error.setText(msg)
        widget.setFocus()
        return None

    def get_payload(self) -> dict | None:
        if not non_empty(self.name.text()):
            return self._fail(self.name, "Name is required.")
        for w, label in ((self.cost_price, "Cost price"), (self.suggested_price, "Suggested price")):
            if not is_non_negative_number(w.text()):
                return self._fail(w, f"{label} must be a non-negative number.")
        ints = {}
        for w, key, label in (
            (self.current_stock, "current_stock", "Current stock"),
            (self.min_stock, "min_stock", "Minimum stock"),
        ):
            ok, v = try_parse_int(w.text())
            if not ok or v is None or v < 0:
                return self._fail(w, f"{label} must be a whole number ≥ 0.")
            ints[key] = v
        self.lbl_error.setText("")
        payload = {
            "name": self.name.text().strip(),
            "category": self.category.text().strip(),
            "cost_price": try_parse_float(self.cost_price.text())[1],
            "suggested_price": try_parse_float(self.suggested_price.text())[1],
            **ints,
        }
        if self._initial is not None:
            payload["total_sold"] = self._initial.total_sold
            payload["last_restock_date"] = self._initial.last_restock_date
        return payload

    def accept(self):
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self):
        return self._payload


class RestockDialog(QDialog):
    """Quantity received + unit cost, with a live preview of the new average cost."""

    def __init__(self, parent=None, product: Product | None = None):
        super().__init__(parent)
        self.setWindowTitle(f"Restock: {product.name}" if product else "Restock")
        self.setModal(True)
        self._product = product
        self._payload = None

        self.quantity = QLineEdit()
        self.quantity.setPlaceholderText("1")
        self.unit_cost = QLineEdit()
        if product is not None:
            self.unit_cost.setText(f"{product.cost_price:.2f}")
        self.lbl_current = QLabel(
            f"Stock {product.current_stock} @ {fmt_money(product.cost_price)}" if product else ""
        )
        self.lbl_new_cost = QLabel("")
        self.lbl_error = QLabel("")
        self.lbl_error.setStyleSheet("color: #c62828;")

        form = QFormLayout()
        form.addRow("Current", self.lbl_current)
        form.addRow("Quantity received*", self.quantity)
        form.addRow("Unit cost*", self.unit_cost)
        form.addRow("New average cost", self.lbl_new_cost)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self.lbl_error)
        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self.quantity.textChanged.connect(self._update_preview)
        self.unit_cost.textChanged.connect(self._update_preview)
        self._update_preview()

    def _update_preview(self, *_):
        ok_q, qty = try_parse_int(self.quantity.text())
        ok_c, cost = try_parse_float(self.unit_cost.text())
        if self._product is None or not (ok_q and ok_c) or qty is None or cost is None or qty < 1:
            self.lbl_new_cost.setText("")
            return
        p = self._product
        self.lbl_new_cost.setText(
            fmt_money(weighted_average_cost(p.current_stock, p.cost_price, qty, cost))
        )

    def get_payload(self) -> dict | None:
        ok, qty = try_parse_int(self.quantity.text())
        if not ok or qty is None or qty < 1:
            self.lbl_error.setText("Quantity must be a whole number ≥ 1.")
            self.quantity.setFocus()
            return None
        if not is_non_negative_number(self.unit_cost.text()):
            self.lbl_error.setText("Unit cost must be a non-negative number.")
            self.unit_cost.setFocus()
            return None
        self.lbl_error.setText("")
        return {"quantity": qty, "unit_cost": try_parse_float(self.unit_cost.text())[1]}

    def accept(self):
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self):
        return self._payload
