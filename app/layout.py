# app/layout.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from app.errors import LayoutError

SPACE = "SPACE"

DEFAULT_ROWS: List[List[str]] = [
    ["`", "1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "="],
    ["Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P", "[", "]"],
    ["A", "S", "D", "F", "G", "H", "J", "K", "L", ";", "'"],
    ["Z", "X", "C", "V", "B", "N", "M", ",", ".", "/"],
    [SPACE],
]


class KeyboardLayout:
    """Ordered rows of key labels. Fixed once built."""

    def __init__(self, rows: Sequence[Sequence[str]] = DEFAULT_ROWS):
        if not rows:
            raise LayoutError("Keyboard layout has no rows")
        built: List[Tuple[str, ...]] = []
        seen = set()
        for idx, row in enumerate(rows):
            if isinstance(row, str) or not row:
                raise LayoutError(f"Row {idx} must be a non-empty list of labels")
            for label in row:
                if not isinstance(label, str) or not label:
                    raise LayoutError(f"Row {idx} has an invalid label: {label!r}")
                if label in seen:
                    raise LayoutError(f"Duplicate key label: {label!r}")
                seen.add(label)
            built.append(tuple(row))
        self._rows = tuple(built)
        self._available = tuple(label for row in self._rows for label in row)

    @property
    def rows(self) -> Tuple[Tuple[str, ...], ...]:
        return self._rows

    @property
    def available_keys(self) -> Tuple[str, ...]:
        return self._available

    def __contains__(self, label: str) -> bool:
        return label in self._available

    def __len__(self) -> int:
        return len(self._available)


@dataclass(frozen=True)
class KeyGeometry:
    start_x: float = 250
    start_y: float = 350
    key_width: float = 60
    key_height: float = 60
    key_spacing: float = 10
    # fractions of one key unit (width + spacing), per row
    row_offsets: Tuple[float, ...] = (0, 1, 0.75, 0.75, 0.55)
    space_multiplier: float = 6

    @property
    def unit(self) -> float:
        return self.key_width + self.key_spacing

    def row_offset(self, row_index: int) -> float:
        if row_index < len(self.row_offsets):
            return self.row_offsets[row_index] * self.unit
        return 0.0

    def width_of(self, label: str) -> float:
        if label == SPACE:
            return self.key_width * self.space_multiplier
        return self.key_width


@dataclass(frozen=True)
class KeyPlacement:
    label: str
    x: float
    y: float
    width: float
    height: float


def place_keys(layout: KeyboardLayout, geometry: KeyGeometry) -> Dict[str, KeyPlacement]:
    """
    Center position and size of every key, in layout order.
    Rows are centered against the first row, then staggered by the row offset.
    """
    unit = geometry.unit
    first_row_width = len(layout.rows[0]) * unit
    out: Dict[str, KeyPlacement] = {}
    for r, row in enumerate(layout.rows):
        row_width = len(row) * unit
        row_start_x = geometry.start_x + (first_row_width - row_width) / 2 + geometry.row_offset(r)
        y = geometry.start_y + r * (geometry.key_height + geometry.key_spacing)
        for c, label in enumerate(row):
            width = geometry.width_of(label)
            x = row_start_x + c * (width + geometry.key_spacing)
            out[label] = KeyPlacement(label, x, y, width, geometry.key_height)
    return out
