from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from app.layout import KeyboardLayout

TENTH = Decimal("0.1")


@dataclass
class KeyReport:
    label: str
    row: int
    hits: int = 0
    misses: int = 0

    @property
    def attempts(self) -> int:
        return self.hits + self.misses

    @property
    def miss_rate(self) -> Optional[float]:
        if not self.attempts:
            return None
        return self.misses / self.attempts


@dataclass
class PracticeState:
    target_key: Optional[str] = None
    correct_count: int = 0
    incorrect_count: int = 0
    # per target label: [hits, misses]
    tally: Dict[str, List[int]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.correct_count + self.incorrect_count

    def mark_key(self, target: str, correct: bool):
        if correct:
            self.correct_count += 1
        else:
            self.incorrect_count += 1
        self.tally.setdefault(target, [0, 0])[0 if correct else 1] += 1

    def accuracy(self) -> Optional[Decimal]:
        """Percentage to one decimal, ties rounded up; None before the first counted keystroke."""
        if self.total == 0:
            return None
        pct = Decimal(self.correct_count / self.total * 100)
        return pct.quantize(TENTH, rounding=ROUND_HALF_UP)

    def score_text(self) -> str:
        text = f"Correct: {self.correct_count} | Incorrect: {self.incorrect_count}"
        acc = self.accuracy()
        if acc is not None:
            text += f" | Accuracy: {acc}%"
        return text

    def key_report(self, layout: KeyboardLayout) -> List[KeyReport]:
        """One entry per key, in layout order, untried keys included."""
        out = []
        for r, row in enumerate(layout.rows):
            for label in row:
                hits, misses = self.tally.get(label, (0, 0))
                out.append(KeyReport(label, r, hits, misses))
        return out
