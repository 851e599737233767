# services/practice.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional
import logging
import random

from app.config import INSTRUCTIONS_ROW, PROMPT_ROW, SCORE_ROW, TITLE_ROW
from app.layout import SPACE, KeyboardLayout, KeyGeometry, place_keys
from app.state import PracticeState
from app.themes import THEMES, DEFAULT_THEME_INDEX, Theme
from services.surface import KeyHandle, RenderSurface, TextHandle, TextStyle

log = logging.getLogger(__name__)

TITLE = "Typing Tutor"
INSTRUCTIONS = "Press the highlighted key on your keyboard"


def normalize_key(raw: str) -> str:
    """Space bar becomes SPACE, everything else is upper-cased."""
    if raw == " ":
        return SPACE
    return raw.upper()


class Phase(Enum):
    WAITING = "waiting"
    FLASHING_SUCCESS = "flashing_success"
    FLASHING_ERROR = "flashing_error"


@dataclass
class KeyVisual:
    label: str
    x: float
    y: float
    width: float
    height: float
    default_color: str
    handle: KeyHandle
    color: str = ""
    pulsing: bool = False
    flashing: bool = False
    flash_color: str = ""


class TypingPracticeController:
    def __init__(
        self,
        surface: RenderSurface,
        layout: Optional[KeyboardLayout] = None,
        geometry: Optional[KeyGeometry] = None,
        theme: Optional[Theme] = None,
        rng: Optional[random.Random] = None,
        width: int = 1280,
    ):
        self.surface = surface
        self.layout = layout or KeyboardLayout()
        self.geometry = geometry or KeyGeometry()
        self.theme = theme or THEMES[DEFAULT_THEME_INDEX]
        self.rng = rng or random.Random()
        self.center_x = width / 2
        self.state = PracticeState()
        self.keys: Dict[str, KeyVisual] = {}
        self._pending: Dict[str, Optional[Callable[[], None]]] = {}
        self._texts: Dict[str, TextHandle] = {}
        self.score_text: Optional[TextHandle] = None
        self.prompt_text: Optional[TextHandle] = None

    @property
    def available_keys(self):
        return self.layout.available_keys

    @property
    def target_key(self) -> Optional[str]:
        return self.state.target_key

    @property
    def active_key(self) -> Optional[str]:
        for label, visual in self.keys.items():
            if visual.pulsing:
                return label
        return None

    @property
    def phase(self) -> Phase:
        if any(cb is not None for cb in self._pending.values()):
            return Phase.FLASHING_SUCCESS
        if self._pending:
            return Phase.FLASHING_ERROR
        return Phase.WAITING

    # ---------------- Setup ----------------
    def initialize(self):
        """Draw the scaffold and keyboard, then pick the first target."""
        t = self.theme
        self.surface.set_background(t.background)
        self._texts["title"] = self._add_row_text(TITLE_ROW, TITLE, t.text)
        self._texts["instructions"] = self._add_row_text(INSTRUCTIONS_ROW, INSTRUCTIONS, t.text_muted)
        self.score_text = self._texts["score"] = self._add_row_text(SCORE_ROW, self.state.score_text(), t.text)
        self.prompt_text = self._texts["prompt"] = self._add_row_text(PROMPT_ROW, "", t.prompt)
        self.render_keyboard()
        log.info("Keyboard ready: %d keys in %d rows", len(self.keys), len(self.layout.rows))
        self.choose_new_target()

    def _add_row_text(self, row, content: str, color: str) -> TextHandle:
        y, size, bold = row
        return self.surface.add_text(self.center_x, y, content, TextStyle(size, color, bold))

    def render_keyboard(self):
        t = self.theme
        for label, p in place_keys(self.layout, self.geometry).items():
            style = TextStyle(18 if label == SPACE else 24, t.key_text, bold=True)
            handle = self.surface.add_key(p.x, p.y, p.width, p.height, label, t.key_fill, t.key_stroke, style)
            self.keys[label] = KeyVisual(
                label, p.x, p.y, p.width, p.height,
                default_color=t.key_fill, handle=handle, color=t.key_fill,
            )

    # ---------------- Target loop ----------------
    def choose_new_target(self):
        keys = self.available_keys
        self.state.target_key = keys[self.rng.randint(0, len(keys) - 1)]
        log.debug("Target -> %s", self.state.target_key)
        if self.prompt_text is not None:
            self.prompt_text.set_text(f"Press: {self.state.target_key}")
        self.highlight(self.state.target_key)

    def highlight(self, key: str):
        # clear every key, then mark the one target
        for visual in self.keys.values():
            if visual.pulsing:
                self.surface.stop_pulse(visual.handle)
                visual.pulsing = False
            self._set_color(visual, visual.default_color)

        visual = self.keys.get(key)
        if visual is None:
            return
        self._set_color(visual, self.theme.highlight)
        self.surface.pulse(visual.handle)
        visual.pulsing = True

    def handle_keystroke(self, raw: str):
        label = normalize_key(raw)
        if label not in self.layout:
            return
        if label == self.state.target_key:
            self.on_correct(label)
        else:
            self.on_incorrect(label)

    def on_correct(self, key: str):
        self.state.mark_key(self.state.target_key, True)
        self.update_score_display()
        self.flash(key, self.theme.success, self.choose_new_target)

    def on_incorrect(self, key: str):
        self.state.mark_key(self.state.target_key, False)
        self.update_score_display()
        self.flash(key, self.theme.error)

    # ---------------- Flash ----------------
    def flash(self, key: str, color: str, on_complete: Optional[Callable[[], None]] = None):
        visual = self.keys.get(key)
        if visual is None:
            return
        carried = self._pending.pop(key, None)
        self.surface.stop_animations(visual.handle)
        visual.pulsing = False
        self._pending[key] = on_complete or carried
        visual.flashing = True
        visual.flash_color = color
        self._set_color(visual, color)
        self.surface.flash(visual.handle, lambda: self.flash_finished(key))

    def flash_finished(self, key: str):
        """Completion edge of a flash: reset the key, then run its pending step."""
        if key not in self._pending:
            return
        on_complete = self._pending.pop(key)
        visual = self.keys[key]
        visual.flashing = False
        self._set_color(visual, visual.default_color)
        if on_complete is not None:
            on_complete()

    def update_score_display(self):
        if self.score_text is not None:
            self.score_text.set_text(self.state.score_text())

    # ---------------- Theme ----------------
    def apply_theme(self, theme: Theme):
        old = self.theme
        self.theme = theme
        self.surface.set_background(theme.background)
        for name, handle in self._texts.items():
            if name == "instructions":
                handle.set_color(theme.text_muted)
            elif name == "prompt":
                handle.set_color(theme.prompt)
            else:
                handle.set_color(theme.text)
        for visual in self.keys.values():
            visual.default_color = theme.key_fill
            visual.handle.set_stroke(theme.key_stroke)
            visual.handle.set_label_color(theme.key_text)
            if visual.flashing:
                visual.flash_color = {old.success: theme.success, old.error: theme.error}.get(
                    visual.flash_color, visual.flash_color
                )
            elif visual.pulsing:
                self._set_color(visual, theme.highlight)
            else:
                self._set_color(visual, theme.key_fill)
        # a success flash still owns the target key until it completes
        if self.state.target_key is not None and self.phase is not Phase.FLASHING_SUCCESS:
            self.highlight(self.state.target_key)
        for visual in self.keys.values():
            if visual.flashing and not visual.pulsing:
                self._set_color(visual, visual.flash_color)

    def _set_color(self, visual: KeyVisual, color: str):
        visual.color = color
        visual.handle.set_fill(color)
