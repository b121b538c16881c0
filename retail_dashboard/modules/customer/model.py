from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from ...services.reporting_service import CustomerStats
from ...utils.helpers import fmt_date, fmt_money


class CustomerStatsTableModel(QAbstractTableModel):
    HEADERS = ["Customer", "Purchases", "Items", "Total Spent", "Profit Given", "Last Purchase"]

    def __init__(self, rows: list[CustomerStats]):
        super().__init__()
        self._rows = rows

    def rowCount(self, parent=QModelIndex()):
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        c = self._rows[index.row()]
        col = index.column()
        if role == Qt.DisplayRole:
            return [
                c.name,
                str(c.total_purchases),
                str(c.total_items_bought),
                fmt_money(c.total_spent),
                fmt_money(c.total_profit_given),
                fmt_date(c.last_purchase_date),
            ][col]
        if role == Qt.TextAlignmentRole and 1 <= col <= 4:
            return int(Qt.AlignRight | Qt.AlignVCenter)
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> CustomerStats:
        return self._rows[row]

    def replace(self, rows: list[CustomerStats]):
        self.beginResetModel()
        self._rows = rows
        self.endResetModel()
