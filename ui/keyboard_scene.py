# ui/keyboard_scene.py
from __future__ import annotations
from typing import Callable

from PySide6.QtCore import QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QPen, QPainter
from PySide6.QtWidgets import QGraphicsObject, QGraphicsScene, QGraphicsSimpleTextItem

from core.tweens import TweenManager
from services.surface import TextStyle

FONT_FAMILY = "Arial"


def _font(style: TextStyle) -> QFont:
    f = QFont(FONT_FAMILY)
    f.setPixelSize(style.size)
    f.setBold(style.bold)
    return f


class SceneText:
    """Text item kept centered on its anchor when the content changes."""

    def __init__(self, scene: QGraphicsScene, x: float, y: float, content: str, style: TextStyle):
        self._x, self._y = x, y
        self.item = QGraphicsSimpleTextItem(content)
        self.item.setFont(_font(style))
        self.item.setBrush(QBrush(QColor(style.color)))
        scene.addItem(self.item)
        self._recenter()

    def text(self) -> str:
        return self.item.text()

    def set_text(self, text: str) -> None:
        self.item.setText(text)
        self._recenter()

    def set_color(self, color: str) -> None:
        self.item.setBrush(QBrush(QColor(color)))

    def _recenter(self):
        br = self.item.boundingRect()
        self.item.setPos(self._x - br.width() / 2, self._y - br.height() / 2)


class KeyBackground(QGraphicsObject):
    def __init__(self, width: float, height: float, fill: str, stroke: str, parent=None):
        super().__init__(parent)
        self._rect = QRectF(-width / 2, -height / 2, width, height)
        self._fill = QColor(fill)
        self._pen = QPen(QColor(stroke), 2)

    def boundingRect(self) -> QRectF:
        return self._rect.adjusted(-1, -1, 1, 1)

    def paint(self, painter: QPainter, option, widget=None):
        painter.setPen(self._pen)
        painter.setBrush(self._fill)
        painter.drawRect(self._rect)

    def fill(self) -> str:
        return self._fill.name()

    def set_fill(self, color: str):
        self._fill = QColor(color)
        self.update()

    def set_stroke(self, color: str):
        self._pen = QPen(QColor(color), 2)
        self.update()


class KeyItem(QGraphicsObject):
    """Container centered on the key; scaling it scales background and label together."""

    def __init__(self, x: float, y: float, width: float, height: float,
                 label: str, fill: str, stroke: str, label_style: TextStyle):
        super().__init__()
        self.label = label
        self.setPos(x, y)
        self.background = KeyBackground(width, height, fill, stroke, self)
        self.text = QGraphicsSimpleTextItem(label, self)
        self.text.setFont(_font(label_style))
        self.text.setBrush(QBrush(QColor(label_style.color)))
        br = self.text.boundingRect()
        self.text.setPos(-br.width() / 2, -br.height() / 2)

    def boundingRect(self) -> QRectF:
        return QRectF()

    def paint(self, painter, option, widget=None):
        pass

    # KeyHandle
    def set_fill(self, color: str) -> None:
        self.background.set_fill(color)

    def set_stroke(self, color: str) -> None:
        self.background.set_stroke(color)

    def set_label_color(self, color: str) -> None:
        self.text.setBrush(QBrush(QColor(color)))


class KeyboardScene(QGraphicsScene):
    """QGraphicsScene that acts as the controller's rendering surface."""

    def __init__(self, width: int = 1280, height: int = 800, parent=None):
        super().__init__(0, 0, width, height, parent)
        self.tweens = TweenManager(self)

    def set_background(self, color: str) -> None:
        self.setBackgroundBrush(QBrush(QColor(color)))

    def add_text(self, x: float, y: float, content: str, style: TextStyle) -> SceneText:
        return SceneText(self, x, y, content, style)

    def add_key(self, x, y, width, height, label, fill, stroke, label_style) -> KeyItem:
        item = KeyItem(x, y, width, height, label, fill, stroke, label_style)
        self.addItem(item)
        return item

    def pulse(self, key: KeyItem) -> None:
        self.tweens.pulse(key.background)

    def stop_pulse(self, key: KeyItem) -> None:
        self.tweens.kill_tweens_of(key.background)
        key.background.setOpacity(1.0)

    def flash(self, key: KeyItem, on_finished: Callable[[], None]) -> None:
        self.tweens.scale_flash(key, on_finished=on_finished)

    def stop_animations(self, key: KeyItem) -> None:
        self.stop_pulse(key)
        self.tweens.kill_tweens_of(key)
        key.setScale(1.0)

