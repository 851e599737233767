# core/tweens.py
from __future__ import annotations
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QObject, QPropertyAnimation, QAbstractAnimation, QEasingCurve


class TweenManager(QObject):
    """Owns property animations and lets callers cancel them per target object."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._by_target: Dict[int, List[QPropertyAnimation]] = {}

    def pulse(self, target: QObject, low: float = 0.6, half_ms: int = 500) -> QPropertyAnimation:
        """Opacity 1 -> low -> 1, forever."""
        anim = QPropertyAnimation(target, b"opacity", self)
        anim.setDuration(half_ms * 2)
        anim.setStartValue(1.0)
        anim.setKeyValueAt(0.5, low)
        anim.setEndValue(1.0)
        anim.setLoopCount(-1)
        anim.setEasingCurve(QEasingCurve.InOutQuad)
        self._start(target, anim)
        return anim

    def scale_flash(
        self,
        target: QObject,
        peak: float = 1.15,
        half_ms: int = 100,
        on_finished: Optional[Callable[[], None]] = None,
    ) -> QPropertyAnimation:
        """Scale 1 -> peak -> 1 once, then on_finished."""
        anim = QPropertyAnimation(target, b"scale", self)
        anim.setDuration(half_ms * 2)
        anim.setStartValue(1.0)
        anim.setKeyValueAt(0.5, peak)
        anim.setEndValue(1.0)
        anim.setEasingCurve(QEasingCurve.OutQuad)

        def _done():
            self._forget(target, anim)
            if on_finished is not None:
                on_finished()

        anim.finished.connect(_done)
        self._start(target, anim)
        return anim

    def kill_tweens_of(self, target: QObject) -> int:
        """Stop every animation on target. Stopped animations do not emit finished."""
        anims = self._by_target.pop(id(target), [])
        for anim in anims:
            anim.stop()
            anim.deleteLater()
        return len(anims)

    def running(self, target: QObject) -> int:
        return sum(
            1 for a in self._by_target.get(id(target), [])
            if a.state() == QAbstractAnimation.Running
        )

    def _start(self, target: QObject, anim: QPropertyAnimation):
        self._by_target.setdefault(id(target), []).append(anim)
        anim.start()

    def _forget(self, target: QObject, anim: QPropertyAnimation):
        anims = self._by_target.get(id(target))
        if anims and anim in anims:
            anims.remove(anim)
            if not anims:
                del self._by_target[id(target)]
        anim.deleteLater()
