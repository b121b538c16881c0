from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QLabel
from ...widgets.table_view import TableView

class CustomerView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        row = QHBoxLayout()
        row.addWidget(QLabel("<b>Customers</b> (ranked by total spent)"))
        row.addStretch(1)
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search customers…")
        row.addWidget(QLabel("Search:"))
        row.addWidget(self.search, 2)
        layout.addLayout(row)
        self.table = TableView()
        layout.addWidget(self.table, 1)
