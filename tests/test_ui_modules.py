# tests/test_ui_modules.py
from datetime import datetime

import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import Qt

from retail_dashboard.modules.customer.controller import CustomerController
from retail_dashboard.modules.dashboard.controller import DashboardController
from retail_dashboard.modules.inventory.controller import InventoryController
from retail_dashboard.modules.inventory.form import ProductForm, RestockDialog
from retail_dashboard.modules.sales.controller import SalesController
from retail_dashboard.modules.sales.form import SaleForm


def _cell(model, row, col):
    return model.data(model.index(row, col), Qt.DisplayRole)


# ---------------------------- dashboard ----------------------------

def test_dashboard_kpis_follow_store(qtbot, services):
    ctrl = DashboardController(services)
    qtbot.addWidget(ctrl.get_widget())
    v = ctrl.view
    assert v.kpi_text("total_revenue") == "170.00"
    assert v.kpi_text("total_profit") == "108.00"
    assert v.kpi_text("low_stock") == "1"
    assert v.kpi_text("items_sold") == "3"

    services.sales.record_sale("3", "Ana", 6, 80.0)
    assert v.kpi_text("total_revenue") == "650.00"
    assert v.kpi_text("low_stock") == "2"
    assert len(v.revenue_chart.series()) == 1
    assert v.revenue_chart.series()[0].count() == 3


def test_dashboard_insights_refresh(qtbot, services):
    ctrl = DashboardController(services)
    qtbot.addWidget(ctrl.get_widget())
    with qtbot.waitSignal(ctrl.insights_job.insights_ready, timeout=3000):
        ctrl.view.btn_refresh_insights.click()
    assert ctrl.view.btn_refresh_insights.isEnabled()
    assert ctrl.view.lbl_stock_alert.text() == "—"


# ---------------------------- inventory ----------------------------

def test_inventory_table_and_search(qtbot, services):
    ctrl = InventoryController(services)
    qtbot.addWidget(ctrl.get_widget())
    model = ctrl.base_model
    assert model.rowCount() == 3
    assert _cell(model, 1, 9) == "Low stock"
    assert _cell(model, 1, 4) == "10.20"

    ctrl.view.search.setText("office")
    assert model.rowCount() == 1
    assert model.at(0).name == "Laptop Stand"

    services.inventory.add_product({
        "name": "Office Chair", "category": "Office", "cost_price": 50,
        "suggested_price": 120, "current_stock": 3, "min_stock": 1,
    })
    assert model.rowCount() == 2


def test_product_form_payload(qtbot):
    form = ProductForm()
    qtbot.addWidget(form)
    form.name.setText("  Pen ")
    form.category.setText("Office")
    form.cost_price.setText("1.50")
    form.suggested_price.setText("4")
    form.current_stock.setText("100")
    form.min_stock.setText("10")
    assert form.lbl_min_margin.text() == "1.80"
    assert form.get_payload() == {
        "name": "Pen", "category": "Office", "cost_price": 1.5,
        "suggested_price": 4.0, "current_stock": 100, "min_stock": 10,
    }


@pytest.mark.parametrize("field,value", [
    ("name", ""), ("cost_price", "-1"), ("suggested_price", "abc"),
    ("current_stock", "2.5"), ("min_stock", "-3"),
])
def test_product_form_rejects_invalid(qtbot, field, value):
    form = ProductForm()
    qtbot.addWidget(form)
    for name, text in [("name", "Pen"), ("cost_price", "1"), ("suggested_price", "2"),
                       ("current_stock", "1"), ("min_stock", "0")]:
        getattr(form, name).setText(text)
    getattr(form, field).setText(value)
    assert form.get_payload() is None
    assert form.lbl_error.text()


def test_product_form_edit_keeps_counters(qtbot, store):
    form = ProductForm(initial=store.get_product("1"))
    qtbot.addWidget(form)
    payload = form.get_payload()
    assert payload["total_sold"] == 12
    assert payload["last_restock_date"] == "2023-10-01"


def test_restock_dialog_preview_and_payload(qtbot):
    from retail_dashboard.database.repositories import Product

    dlg = RestockDialog(product=Product("p", "Mug", "", 45.0, 90.0, 15, 2))
    qtbot.addWidget(dlg)
    dlg.quantity.setText("5")
    dlg.unit_cost.setText("60")
    assert dlg.lbl_new_cost.text() == "48.75"
    assert dlg.get_payload() == {"quantity": 5, "unit_cost": 60.0}
    dlg.quantity.setText("0")
    assert dlg.get_payload() is None


# ---------------------------- sales ----------------------------

def test_sales_ledger_newest_first_and_search(qtbot, services):
    ctrl = SalesController(services)
    qtbot.addWidget(ctrl.get_widget())
    model = ctrl.base_model
    assert [model.at(r).sale_id for r in range(model.rowCount())] == ["102", "101"]

    services.sales.record_sale("3", "Zoe", 1, 80.0, datetime(2030, 1, 1, 9, 0))
    assert model.at(0).customer_name == "Zoe"

    ctrl.view.search.setText("cable")
    assert model.rowCount() == 1
    assert _cell(model, 0, 1) == "Mary Oliver"


def test_sale_form_prefill_and_payload(qtbot, store):
    form = SaleForm(products=store.products, sales=store.sales)
    qtbot.addWidget(form)
    form.select_product("2")
    assert form.price.text() == "25.00"
    assert form.lbl_max_sold.text() == "25.00"
    assert form.lbl_min_margin.text() == "10.20"

    form.quantity.setText("2")
    assert form.lbl_profit.text() == "33.00"

    form.customer.setText(" Ana ")
    payload = form.get_payload()
    assert payload["product_id"] == "2"
    assert payload["customer_name"] == "Ana"
    assert payload["quantity"] == 2
    assert payload["unit_sale_price"] == 25.0
    assert isinstance(payload["sale_date"], datetime)


def test_sale_form_blocks_overselling(qtbot, store):
    form = SaleForm(products=store.products, sales=store.sales)
    qtbot.addWidget(form)
    form.select_product("2")
    form.customer.setText("Ana")
    form.quantity.setText("5")
    assert form.get_payload() is None
    assert "4" in form.lbl_error.text()


def test_sale_form_never_sold_label(qtbot, store):
    form = SaleForm(products=store.products, sales=store.sales)
    qtbot.addWidget(form)
    form.select_product("3")
    assert form.lbl_max_sold.text() == "never sold"


# ---------------------------- customers ----------------------------

def test_customer_ledger_ranking(qtbot, services):
    ctrl = CustomerController(services)
    qtbot.addWidget(ctrl.get_widget())
    model = ctrl.base_model
    assert [model.at(r).name for r in range(model.rowCount())] == ["John Smith", "Mary Oliver"]

    services.sales.record_sale("1", "Mary Oliver", 1, 120.0)
    assert model.at(0).name == "Mary Oliver"
    assert _cell(model, 0, 3) == "170.00"

    ctrl.view.search.setText("john")
    assert model.rowCount() == 1


# ---------------------------- main window ----------------------------

def test_main_window_pages_and_persist_errors(qtbot, services):
    from retail_dashboard.main import MainWindow

    win = MainWindow(services)
    qtbot.addWidget(win)
    assert [t for t, _ in win.modules] == ["Dashboard", "Inventory", "Sales", "Customers"]
    win.nav.setCurrentRow(2)
    assert win.stack.currentIndex() == 2

    services.store._persist_error_handler("Could not save products")
    assert win.statusBar().currentMessage() == "Could not save products"
