import os
import random

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeText:
    def __init__(self, content, style):
        self.content = content
        self.style = style
        self.color = style.color

    def set_text(self, text):
        self.content = text

    def set_color(self, color):
        self.color = color


class FakeKey:
    def __init__(self, label, x, y, width, height, fill, stroke):
        self.label = label
        self.pos = (x, y)
        self.size = (width, height)
        self.fill = fill
        self.stroke = stroke
        self.label_color = None

    def set_fill(self, color):
        self.fill = color

    def set_stroke(self, color):
        self.stroke = color

    def set_label_color(self, color):
        self.label_color = color


class FakeSurface:
    """Records drawing calls; flashes complete only when the test says so."""

    def __init__(self):
        self.background = None
        self.texts = []
        self.keys = {}
        self.pulsing = set()
        self.flashes = {}
        self.cancelled = []

    def set_background(self, color):
        self.background = color

    def add_text(self, x, y, content, style):
        handle = FakeText(content, style)
        self.texts.append(handle)
        return handle

    def add_key(self, x, y, width, height, label, fill, stroke, label_style):
        handle = FakeKey(label, x, y, width, height, fill, stroke)
        self.keys[label] = handle
        return handle

    def pulse(self, key):
        self.pulsing.add(key.label)

    def stop_pulse(self, key):
        self.pulsing.discard(key.label)

    def flash(self, key, on_finished):
        self.flashes[key.label] = on_finished

    def stop_animations(self, key):
        self.stop_pulse(key)
        if self.flashes.pop(key.label, None) is not None:
            self.cancelled.append(key.label)

    def finish_flash(self, label):
        self.flashes.pop(label)()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def rng():
    return random.Random(1234)
