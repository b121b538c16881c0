from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

from ...database.repositories.sales_repo import Sale
from ...utils.helpers import fmt_date, fmt_money


class SalesTableModel(QAbstractTableModel):
    HEADERS = ["Date", "Customer", "Product", "Qty", "Unit Price", "Total", "Profit"]

    def __init__(self, rows: list[Sale]):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        s = self._rows[index.row()]
        c = index.column()
        if role == Qt.DisplayRole:
            return [
                fmt_date(s.date, "%d/%m/%Y %H:%M"),
                s.customer_name,
                s.product_name,
                str(s.quantity),
                fmt_money(s.sale_price),
                fmt_money(s.total_value),
                fmt_money(s.profit),
            ][c]
        if role == Qt.TextAlignmentRole and c >= 3:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        if role == Qt.ForegroundRole and c == 6 and s.profit < 0:
            return QColor("#c62828")
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> Sale:
        return self._rows[row]

    def replace(self, rows: list[Sale]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
