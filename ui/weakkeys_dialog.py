# ui/weakkeys_dialog.py
from __future__ import annotations
from typing import List

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)
import pyqtgraph as pg

from app.state import KeyReport

ROW_COLORS = ["#64748b", "#3b82f6", "#22c55e", "#eab308", "#a855f7"]
UNTRIED = "–"


def visible_reports(reports: List[KeyReport], row: int | None, show_untried: bool, weakest_first: bool):
    """Filter by keyboard row, optionally hide untried keys, then order."""
    out = [r for r in reports if (row is None or r.row == row) and (show_untried or r.attempts)]
    if weakest_first:
        # untried keys sink to the bottom, layout order breaks ties
        out.sort(key=lambda r: (r.miss_rate is None, -(r.miss_rate or 0.0), -r.misses))
    return out


class WeakKeysDialog(QDialog):
    """Per-key miss rate for the session, one bar per key colored by keyboard row."""

    def __init__(self, reports: List[KeyReport], parent=None):
        super().__init__(parent)
        self.setWindowTitle("Weak Keys")
        self.resize(760, 540)
        self._reports = list(reports)
        self._rows = sorted({r.row for r in self._reports})
        self.shown: List[KeyReport] = []

        root = QVBoxLayout(self)

        ctrl = QHBoxLayout()
        ctrl.addWidget(QLabel("Row:"))
        self.row_pick = QComboBox()
        self.row_pick.addItem("All rows", None)
        for r in self._rows:
            self.row_pick.addItem(f"Row {r + 1}", r)
        self.row_pick.currentIndexChanged.connect(self.refresh)
        ctrl.addWidget(self.row_pick)

        self.show_untried = QCheckBox("Show untried keys")
        self.show_untried.setChecked(True)
        self.show_untried.toggled.connect(self.refresh)
        ctrl.addWidget(self.show_untried)

        self.order_pick = QComboBox()
        self.order_pick.addItems(["Keyboard order", "Weakest first"])
        self.order_pick.currentIndexChanged.connect(self.refresh)
        ctrl.addWidget(self.order_pick)
        ctrl.addStretch(1)
        root.addLayout(ctrl)

        self.plot = pg.PlotWidget()
        self.plot.setBackground(None)
        self.plot.showGrid(x=False, y=True, alpha=0.1)
        self.plot.setMenuEnabled(False)
        self.plot.setMouseEnabled(x=False, y=False)
        self.plot.hideButtons()
        self.plot.setYRange(0, 100)
        self.plot.setLabel("left", "Miss %")
        root.addWidget(self.plot, stretch=2)
        self._bars = pg.BarGraphItem(x=[], height=[], width=0.8)
        self.plot.addItem(self._bars)

        self.table = QTableWidget(0, 5)
        self.table.setHorizontalHeaderLabels(["Key", "Row", "Hits", "Misses", "Miss %"])
        self.table.horizontalHeader().setStretchLastSection(True)
        root.addWidget(self.table, stretch=1)

        self.refresh()

    def refresh(self):
        self.shown = visible_reports(
            self._reports,
            self.row_pick.currentData(),
            self.show_untried.isChecked(),
            self.order_pick.currentIndex() == 1,
        )
        heights = [round((r.miss_rate or 0.0) * 100) for r in self.shown]
        brushes = [pg.mkBrush(ROW_COLORS[r.row % len(ROW_COLORS)]) for r in self.shown]
        self._bars.setOpts(x=list(range(len(self.shown))), height=heights, width=0.8, brushes=brushes)
        self.plot.getAxis("bottom").setTicks([[(i, r.label) for i, r in enumerate(self.shown)]])

        self.table.setRowCount(len(self.shown))
        for i, r in enumerate(self.shown):
            rate = UNTRIED if r.miss_rate is None else f"{r.miss_rate * 100:.0f}%"
            cells = (r.label, str(r.row + 1), str(r.hits), str(r.misses), rate)
            for col, value in enumerate(cells):
                self.table.setItem(i, col, QTableWidgetItem(value))
