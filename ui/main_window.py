# ui/main_window.py
from __future__ import annotations
import logging
import random

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QMenu, QToolButton, QPushButton, QGraphicsView, QFrame
)
from PySide6.QtGui import QAction, QKeySequence, QPainter
from PySide6.QtCore import Qt, Signal

from app.config import AppConfig
from app.themes import BUILTIN_COUNT, THEMES, find_theme
from services.practice import TypingPracticeController
from ui.keyboard_scene import KeyboardScene
from ui.weakkeys_dialog import WeakKeysDialog

log = logging.getLogger(__name__)


class KeyboardView(QGraphicsView):
    """Shows the scene scaled to fit (aspect preserved) and reports key presses."""

    keyPressed = Signal(str)

    def __init__(self, scene: KeyboardScene, parent=None):
        super().__init__(scene, parent)
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignCenter)
        self.setFrameShape(QFrame.NoFrame)
        self.setFocusPolicy(Qt.StrongFocus)

    def resizeEvent(self, ev):
        super().resizeEvent(ev)
        self.fitInView(self.sceneRect(), Qt.KeepAspectRatio)

    def keyPressEvent(self, ev):
        raw = self._key_identifier(ev)
        if raw is None:
            return super().keyPressEvent(ev)
        self.keyPressed.emit(raw)
        ev.accept()

    @staticmethod
    def _key_identifier(ev) -> str | None:
        if ev.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        key = ev.key()
        if key == Qt.Key_Space:
            return " "
        t = ev.text()
        if t and t.isprintable():
            return t
        name = QKeySequence(key).toString()
        return name or None


class MainWindow(QMainWindow):
    def __init__(self, config: AppConfig | None = None):
        super().__init__()
        self.config = config or AppConfig()
        self.setWindowTitle(self.config.title)
        self.resize(self.config.width, self.config.height)
        theme = find_theme(self.config.theme)
        self.theme_idx = THEMES.index(theme)

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(0, 0, 0, 0)
        root_v.setSpacing(0)
        self._build_top_bar(root_v)

        self.scene = KeyboardScene(self.config.width, self.config.height, self)
        self.view = KeyboardView(self.scene, root)
        root_v.addWidget(self.view, 1)
        self.setCentralWidget(root)

        rng = random.Random(self.config.seed) if self.config.seed is not None else None
        self.controller = TypingPracticeController(
            self.scene,
            layout=self.config.layout,
            geometry=self.config.geometry,
            theme=theme,
            rng=rng,
            width=self.config.width,
        )
        self.controller.initialize()
        self.view.keyPressed.connect(self.controller.handle_keystroke)

        self._apply_theme(self.theme_idx)
        self.view.setFocus()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 8, 14, 8)
        h.setSpacing(10)

        self.theme_menu = QMenu(self)
        self._rebuild_theme_menu()
        theme_btn = QToolButton(bar)
        theme_btn.setText("Theme")
        theme_btn.setObjectName("TopBtn")
        theme_btn.setMenu(self.theme_menu)
        theme_btn.setPopupMode(QToolButton.InstantPopup)
        # keys must keep reaching the keyboard view
        theme_btn.setFocusPolicy(Qt.NoFocus)
        h.addWidget(theme_btn)

        btn_weak = QPushButton("Weak Keys…", bar)
        btn_weak.clicked.connect(self._open_weakkeys)
        btn_weak.setObjectName("TopBtn")
        btn_weak.setFocusPolicy(Qt.NoFocus)
        h.addWidget(btn_weak)

        h.addStretch(1)
        parent_layout.addWidget(bar)

        self._topbar_qss = """
        QWidget#TopBar {
            background: rgba(255,255,255,0.04);
            border-bottom: 1px solid rgba(255,255,255,0.08);
        }
        QPushButton#TopBtn, QToolButton#TopBtn {
            background: transparent;
            border: 1px solid rgba(255,255,255,0.10);
            border-radius: 9px;
            padding: 6px 12px;
        }
        QPushButton#TopBtn:hover, QToolButton#TopBtn:hover {
            border-color: rgba(255,255,255,0.32);
            background: rgba(255,255,255,0.06);
        }
        QToolButton::menu-indicator { image: none; width: 0px; height: 0px; }
        """

    # ---------------- Theme ----------------
    def _rebuild_theme_menu(self):
        self.theme_menu.clear()
        for i, t in enumerate(THEMES):
            if i == BUILTIN_COUNT:
                self.theme_menu.addSection("Custom")
            act = QAction(t.name, self)
            act.triggered.connect(lambda _=False, idx=i: self._apply_theme(idx))
            self.theme_menu.addAction(act)

    def _apply_theme(self, idx):
        theme = THEMES[idx]
        self.theme_idx = idx
        if self.controller.theme is not theme:
            self.controller.apply_theme(theme)
        self.setStyleSheet(
            f"""
            QWidget {{ background: {theme.background}; color: {theme.text}; }}
            {self._topbar_qss}
            """
        )
        log.info("Theme: %s", theme.name)
        self.view.setFocus()

    # ---------------- Weak Keys ----------------
    def _open_weakkeys(self):
        WeakKeysDialog(self.controller.state.key_report(self.controller.layout), self).exec()
        self.view.setFocus()
