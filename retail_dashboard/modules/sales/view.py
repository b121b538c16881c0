from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLineEdit, QLabel
from ...widgets.table_view import TableView

class SalesView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        row = QHBoxLayout()
        self.btn_new = QPushButton("New Sale")
        row.addWidget(self.btn_new)
        row.addStretch(1)
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search by customer or product…")
        row.addWidget(QLabel("Search:"))
        row.addWidget(self.search, 2)
        layout.addLayout(row)

        self.table = TableView()
        layout.addWidget(self.table, 1)
        self.lbl_totals = QLabel("")
        layout.addWidget(self.lbl_totals)
