"""
Диапазоны баллов для правил диагноза.

Грамматика строки диапазона:
    "A-B"  — A <= score <= B (включительно)
    "<=X"  — score <= X
    ">=Y"  — score >= Y
    иное   — не совпадает ни с чем

Границы — целые числа (в том числе отрицательные), пробелы обрезаются.
Строка, похожая на диапазон, но с нецелыми границами ("a-5", "<=x"),
вызывает RangeSpecError.
"""

import re
from dataclasses import dataclass
from typing import Optional

from core.errors import RangeSpecError

_INT = r"[+-]?\d+"
_BETWEEN_RE = re.compile(rf"^\s*({_INT})\s*-\s*({_INT})\s*$")
_LE_RE = re.compile(rf"^\s*<=\s*({_INT})\s*$")
_GE_RE = re.compile(rf"^\s*>=\s*({_INT})\s*$")


@dataclass(frozen=True)
class ScoreRange:
    """Предикат над целым баллом. None в границе — граница не задана."""
    spec: str
    low: Optional[int] = None
    high: Optional[int] = None
    matches_nothing: bool = False

    def contains(self, score: int) -> bool:
        if self.matches_nothing:
            return False
        if self.low is not None and score < self.low:
            return False
        if self.high is not None and score > self.high:
            return False
        return True

    def __contains__(self, score: int) -> bool:
        return self.contains(score)


def parse_range(spec: str) -> ScoreRange:
    """Разобрать строку диапазона.

    Raises:
        RangeSpecError: строка начинается с "<=" / ">=" или содержит "-",
            но границы не разбираются как целые числа
    """
    text = (spec or "").strip()

    if text.startswith("<="):
        m = _LE_RE.match(text)
        if not m:
            raise RangeSpecError(spec)
        return ScoreRange(spec, high=int(m.group(1)))

    if text.startswith(">="):
        m = _GE_RE.match(text)
        if not m:
            raise RangeSpecError(spec)
        return ScoreRange(spec, low=int(m.group(1)))

    if "-" in text:
        m = _BETWEEN_RE.match(text)
        if not m:
            raise RangeSpecError(spec)
        return ScoreRange(spec, low=int(m.group(1)), high=int(m.group(2)))

    return ScoreRange(spec, matches_nothing=True)


def score_in_range(score: int, spec: str) -> bool:
    """Попадает ли балл в диапазон. RangeSpecError пробрасывается."""
    return parse_range(spec).contains(score)
