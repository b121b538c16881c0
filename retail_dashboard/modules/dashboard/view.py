from __future__ import annotations

from typing import Dict, List

from PySide6.QtCharts import (
    QBarCategoryAxis, QBarSeries, QBarSet, QChart, QChartView, QLineSeries, QValueAxis,
)
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QPainter
from PySide6.QtWidgets import (
    QFrame, QGridLayout, QHBoxLayout, QLabel, QPushButton, QSizePolicy, QVBoxLayout, QWidget,
)

from ...services.insights import Insights
from ...services.reporting_service import Kpis, RevenuePoint, TopProduct
from ...utils.helpers import fmt_money


class DashboardView(QWidget):
    """
    Pure-UI dashboard surface. The controller drives it through the setters.

    Signals:
        insights_refresh_requested()

    Setters:
        set_kpis(kpis)
        set_revenue(points)
        set_top_products(rows)
        set_insights(insights) / set_insights_busy(busy)
    """

    insights_refresh_requested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._kpi_cards: Dict[str, KPICard] = {}
        self._build_ui()

    # ---------------- UI ----------------
    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        title = QLabel("<h2>Dashboard</h2>")
        title.setTextFormat(Qt.RichText)
        root.addWidget(title)

        # ===== KPI row =====
        gridwrap = QWidget()
        grid = QGridLayout(gridwrap)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setHorizontalSpacing(10)
        for col, (key, label, caption) in enumerate([
            ("total_revenue", "Total Revenue", "all sales"),
            ("total_profit", "Total Profit", "sale price - cost"),
            ("low_stock", "Low Stock Items", "at or below minimum"),
            ("items_sold", "Items Sold", "units"),
        ]):
            card = KPICard(label, caption)
            self._kpi_cards[key] = card
            grid.addWidget(card, 0, col)
        gridwrap.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        root.addWidget(gridwrap)

        # ===== Charts =====
        charts = QHBoxLayout()
        charts.setSpacing(10)

        self.revenue_chart = QChart()
        self.revenue_chart.legend().setVisible(False)
        self.revenue_view = QChartView(self.revenue_chart)
        self.revenue_view.setRenderHint(QPainter.Antialiasing)
        self.revenue_view.setMinimumHeight(240)
        charts.addWidget(_Card(self.revenue_view, "Revenue by Day"), 2)

        self.top_chart = QChart()
        self.top_chart.legend().setVisible(False)
        self.top_view = QChartView(self.top_chart)
        self.top_view.setRenderHint(QPainter.Antialiasing)
        self.top_view.setMinimumHeight(240)
        charts.addWidget(_Card(self.top_view, "Top Products (units)"), 1)

        root.addLayout(charts, 1)

        # ===== Insights =====
        panel = QWidget()
        pl = QVBoxLayout(panel)
        pl.setContentsMargins(0, 0, 0, 0)
        head = QHBoxLayout()
        self.lbl_insights_status = QLabel("")
        self.btn_refresh_insights = QPushButton("Refresh Insights")
        self.btn_refresh_insights.clicked.connect(lambda: self.insights_refresh_requested.emit())
        head.addWidget(self.lbl_insights_status)
        head.addStretch(1)
        head.addWidget(self.btn_refresh_insights)
        pl.addLayout(head)

        self.lbl_stock_alert = self._insight_label()
        self.lbl_sales_insight = self._insight_label()
        self.lbl_action_tip = self._insight_label()
        row = QHBoxLayout()
        row.addWidget(_Card(self.lbl_stock_alert, "Stock Alert"))
        row.addWidget(_Card(self.lbl_sales_insight, "Sales"))
        row.addWidget(_Card(self.lbl_action_tip, "Action Tip"))
        pl.addLayout(row)
        root.addWidget(_Card(panel, "Business Insights"))

    @staticmethod
    def _insight_label() -> QLabel:
        lbl = QLabel("")
        lbl.setWordWrap(True)
        lbl.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        return lbl

    # ---------------- Public setters for controller ----------------
    def set_kpis(self, kpis: Kpis) -> None:
        self._kpi_cards["total_revenue"].set_value(fmt_money(kpis.total_revenue))
        self._kpi_cards["total_profit"].set_value(fmt_money(kpis.total_profit))
        self._kpi_cards["low_stock"].set_value(str(kpis.low_stock_count))
        self._kpi_cards["items_sold"].set_value(str(kpis.total_items_sold))

    def kpi_text(self, key: str) -> str:
        return self._kpi_cards[key].lbl_value.text()

    def set_revenue(self, points: List[RevenuePoint]) -> None:
        chart = self.revenue_chart
        _clear_chart(chart)
        series = QLineSeries()
        for i, p in enumerate(points):
            series.append(float(i), float(p.value))
        chart.addSeries(series)

        axis_x = QBarCategoryAxis()
        axis_x.append([p.label for p in points])
        chart.addAxis(axis_x, Qt.AlignBottom)
        series.attachAxis(axis_x)

        axis_y = QValueAxis()
        axis_y.setRange(0.0, _axis_top(p.value for p in points))
        axis_y.setLabelFormat("%.0f")
        chart.addAxis(axis_y, Qt.AlignLeft)
        series.attachAxis(axis_y)

    def set_top_products(self, rows: List[TopProduct]) -> None:
        chart = self.top_chart
        _clear_chart(chart)
        bar = QBarSet("Units")
        for r in rows:
            bar.append(float(r.quantity))
        series = QBarSeries()
        series.append(bar)
        chart.addSeries(series)

        axis_x = QBarCategoryAxis()
        axis_x.append([r.name for r in rows])
        chart.addAxis(axis_x, Qt.AlignBottom)
        series.attachAxis(axis_x)

        axis_y = QValueAxis()
        axis_y.setRange(0.0, _axis_top(r.quantity for r in rows))
        axis_y.setLabelFormat("%d")
        chart.addAxis(axis_y, Qt.AlignLeft)
        series.attachAxis(axis_y)

    def set_insights(self, insights: Insights) -> None:
        self.lbl_stock_alert.setText(insights.stock_alert or "—")
        self.lbl_sales_insight.setText(insights.sales_insight or "—")
        self.lbl_action_tip.setText(insights.action_tip or "—")

    def set_insights_busy(self, busy: bool) -> None:
        self.btn_refresh_insights.setEnabled(not busy)
        self.lbl_insights_status.setText("Analysing…" if busy else "")


def _clear_chart(chart: QChart) -> None:
    chart.removeAllSeries()
    for axis in chart.axes():
        chart.removeAxis(axis)


def _axis_top(values) -> float:
    top = max((float(v) for v in values), default=0.0)
    return top * 1.1 if top > 0 else 1.0


# ======================= Visual building blocks =======================

class KPICard(QFrame):
    def __init__(self, title: str, caption: str) -> None:
        super().__init__()
        self.setObjectName("kpi_card")
        self.setStyleSheet("""
            QFrame#kpi_card {
                border: 1px solid #e1e1e1;
                border-radius: 10px;
                background: #fff;
            }
        """)

        v = QVBoxLayout(self)
        v.setContentsMargins(12, 10, 12, 12)
        v.setSpacing(2)

        self.lbl_title = QLabel(title)
        f = self.lbl_title.font()
        f.setBold(True)
        self.lbl_title.setFont(f)

        self.lbl_value = QLabel("—")
        fv = QFont(self.lbl_value.font())
        fv.setPointSize(fv.pointSize() + 6)
        fv.setBold(True)
        self.lbl_value.setFont(fv)

        self.lbl_caption = QLabel(caption)
        self.lbl_caption.setStyleSheet("color: #777;")

        v.addWidget(self.lbl_title)
        v.addWidget(self.lbl_value)
        v.addWidget(self.lbl_caption)

    def set_value(self, s: str) -> None:
        self.lbl_value.setText(s)


class _Card(QWidget):
    """Wrap any widget in a titled card frame."""
    def __init__(self, inner: QWidget, title: str) -> None:
        super().__init__()
        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        frame = QFrame()
        frame.setFrameShape(QFrame.StyledPanel)
        fl = QVBoxLayout(frame)
        fl.setContentsMargins(12, 10, 12, 12)
        fl.setSpacing(6)
        fl.addWidget(QLabel(f"<b>{title}</b>"))
        fl.addWidget(inner)
        v.addWidget(frame)
