# retail_dashboard/main.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSizePolicy,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from .config import AppConfig, load_config
from .constants import APP_NAME, STYLE_FILE
from .database import get_connection
from .modules.base_module import BaseModule
from .modules.customer.controller import CustomerController
from .modules.dashboard.controller import DashboardController
from .modules.inventory.controller import InventoryController
from .modules.sales.controller import SalesController
from .services import AppServices, build_services
from .utils.loggers import get_logger

_log = logging.getLogger(__name__)


def load_qss() -> str:
    qss = ""
    f = Path(__file__).resolve().parent / STYLE_FILE
    if f.exists():
        qss = f.read_text(encoding="utf-8")
    return qss


class MainWindow(QMainWindow):
    def __init__(self, services: AppServices):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.setWindowFlag(Qt.WindowMinimizeButtonHint, True)
        self.setWindowFlag(Qt.WindowMaximizeButtonHint, True)
        self.setMinimumSize(980, 620)

        self.services = services
        self.modules: list[tuple[str, BaseModule]] = []

        # ---- Central layout: left nav + stacked pages ----
        central = QWidget(self)
        layout = QVBoxLayout(central)
        self.setCentralWidget(central)

        self.nav = QListWidget()
        self.nav.setFixedWidth(130)
        self.nav.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        self.stack = QStackedWidget()

        row = QWidget()
        row_lay = QHBoxLayout(row)
        row_lay.addWidget(self.nav)
        row_lay.addWidget(self.stack, 1)
        layout.addWidget(row, 1)

        self.nav.currentRowChanged.connect(self.stack.setCurrentIndex)

        self.dashboard = DashboardController(services)
        self.add_module("Dashboard", self.dashboard)
        self.add_module("Inventory", InventoryController(services))
        self.add_module("Sales", SalesController(services))
        self.add_module("Customers", CustomerController(services))

        services.store.set_persist_error_handler(self.show_persist_error)

        self.nav.setCurrentRow(0)
        self.statusBar().showMessage("Ready", 3000)

    def add_module(self, title: str, module: BaseModule):
        page = module.get_widget()
        self.nav.addItem(QListWidgetItem(title))
        self.stack.addWidget(page)
        self.modules.append((title, module))

    def show_persist_error(self, message: str) -> None:
        self.statusBar().showMessage(message)


def run(config: AppConfig) -> int:
    get_logger(level=config.log_level, file_path=config.log_file)
    _log.info("Starting %s (db=%s, insights=%s)", APP_NAME, config.db_path, config.insights_provider)

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    conn = get_connection(config.db_path)
    services = build_services(conn, config)

    qss = load_qss()
    if qss:
        app.setStyleSheet(qss)

    win = MainWindow(services)
    win.resize(1180, 760)
    win.show()
    win.dashboard.request_insights()

    try:
        return app.exec()
    finally:
        conn.close()


def main():
    sys.exit(run(load_config()))


if __name__ == "__main__":
    main()
