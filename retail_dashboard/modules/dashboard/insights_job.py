# retail_dashboard/modules/dashboard/insights_job.py
from __future__ import annotations

"""
Runs an InsightsProvider off the UI thread.

Each request gets a sequence number; only the result of the most recent
request is published, older ones are dropped when they arrive.
"""

import logging
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from ...database.repositories.products_repo import Product
from ...database.repositories.sales_repo import Sale
from ...services.insights import FALLBACK_INSIGHTS, InsightsProvider

_log = logging.getLogger(__name__)


class _JobRunnable(QRunnable):
    def __init__(self, work: Callable[[], None]) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._work = work

    @Slot()
    def run(self) -> None:  # type: ignore[override]
        self._work()


class InsightsJob(QObject):
    insights_ready = Signal(object)   # Insights of the latest request
    busy_changed = Signal(bool)

    # worker thread -> owner thread (queued)
    _finished = Signal(int, object)

    def __init__(
        self,
        provider: InsightsProvider,
        pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._provider = provider
        self._pool = pool if pool is not None else QThreadPool.globalInstance()
        self._seq = 0
        self._finished.connect(self._on_finished)

    def request(self, products: Iterable[Product], sales: Iterable[Sale]) -> int:
        self._seq += 1
        seq = self._seq
        products, sales = list(products), list(sales)

        def work() -> None:
            try:
                result = self._provider.generate(products, sales)
            except Exception:
                _log.warning("Insights provider raised", exc_info=True)
                result = FALLBACK_INSIGHTS
            self._finished.emit(seq, result)

        self.busy_changed.emit(True)
        self._pool.start(_JobRunnable(work))
        return seq

    @Slot(int, object)
    def _on_finished(self, seq: int, result) -> None:
        if seq != self._seq:
            _log.debug("Dropping stale insights #%d (latest #%d)", seq, self._seq)
            return
        self.busy_changed.emit(False)
        self.insights_ready.emit(result)
