# services/surface.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True)
class TextStyle:
    size: int
    color: str
    bold: bool = False


class TextHandle(Protocol):
    def set_text(self, text: str) -> None: ...
    def set_color(self, color: str) -> None: ...


class KeyHandle(Protocol):
    def set_fill(self, color: str) -> None: ...
    def set_stroke(self, color: str) -> None: ...
    def set_label_color(self, color: str) -> None: ...


class RenderSurface(Protocol):
    """What the practice controller needs from a renderer + animation engine."""

    def set_background(self, color: str) -> None: ...

    def add_text(self, x: float, y: float, content: str, style: TextStyle) -> TextHandle: ...

    def add_key(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        label: str,
        fill: str,
        stroke: str,
        label_style: TextStyle,
    ) -> KeyHandle: ...

    def pulse(self, key: KeyHandle) -> None:
        """Start an endless opacity pulse on the key background."""
        ...

    def stop_pulse(self, key: KeyHandle) -> None: ...

    def flash(self, key: KeyHandle, on_finished: Callable[[], None]) -> None:
        """Play a one-shot scale-up-and-back, then call on_finished."""
        ...

    def stop_animations(self, key: KeyHandle) -> None:
        """Cancel every animation on the key; a cancelled flash never reports finished."""
        ...
