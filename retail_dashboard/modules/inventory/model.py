from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

from ...database.repositories.products_repo import Product
from ...utils.helpers import fmt_date, fmt_money


class ProductsTableModel(QAbstractTableModel):
    HEADERS = [
        "Name", "Category", "Cost", "Suggested Price", "Min. Margin Price",
        "Stock", "Min Stock", "Sold", "Last Restock", "Status",
    ]

    def __init__(self, rows: list[Product]):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        p = self._rows[index.row()]
        c = index.column()
        if role == Qt.DisplayRole:
            return [
                p.name,
                p.category or "",
                fmt_money(p.cost_price),
                fmt_money(p.suggested_price),
                fmt_money(p.min_margin_price),
                str(p.current_stock),
                str(p.min_stock),
                str(p.total_sold),
                fmt_date(p.last_restock_date),
                "Low stock" if p.is_low_stock else "OK",
            ][c]
        if role == Qt.TextAlignmentRole and 2 <= c <= 7:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        if role == Qt.ForegroundRole and c == 9 and p.is_low_stock:
            return QColor("#c62828")
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> Product:
        return self._rows[row]

    def replace(self, rows: list[Product]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
