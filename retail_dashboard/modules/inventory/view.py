from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLineEdit, QLabel
from ...widgets.table_view import TableView

class InventoryView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        # Top row: actions + search
        row = QHBoxLayout()
        self.btn_add = QPushButton("Add Product")
        self.btn_edit = QPushButton("Edit")
        self.btn_restock = QPushButton("Restock")
        self.btn_delete = QPushButton("Delete")
        for b in (self.btn_add, self.btn_edit, self.btn_restock, self.btn_delete):
            row.addWidget(b)
        row.addStretch(1)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search by name or category…")
        row.addWidget(QLabel("Search:"))
        row.addWidget(self.search, 2)

        layout.addLayout(row)
        self.table = TableView()
        layout.addWidget(self.table, 1)
