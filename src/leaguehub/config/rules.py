"""League rules: qualification thresholds, series formats and bracket shape."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple

Category = Literal["batting", "pitching"]


@dataclass(frozen=True)
class QualificationRule:
    category: str
    stat: str
    multiplier: float
    playoff_minimum: float


@dataclass(frozen=True)
class RoundSpec:
    name: str
    series_count: int
    best_of: int
    codes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.series_count < 1:
            raise ValueError(f"Round {self.name!r} needs at least one series")
        clinch_threshold(self.best_of)


_QUALIFICATION_RULES: Dict[str, QualificationRule] = {
    # Minimum AB = average team games * 2.1
    "batting": QualificationRule(category="batting", stat="ab", multiplier=2.1, playoff_minimum=5),
    # Minimum IP = average team games * 1.0
    "pitching": QualificationRule(category="pitching", stat="ip", multiplier=1.0, playoff_minimum=2),
}

_CLINCH_THRESHOLDS: Dict[int, int] = {
    3: 2,
    5: 3,
    7: 4,
}


def clinch_threshold(best_of: int) -> int:
    """Wins needed to take a best-of-``best_of`` series."""

    if best_of in _CLINCH_THRESHOLDS:
        return _CLINCH_THRESHOLDS[best_of]
    if best_of < 1 or best_of % 2 == 0:
        raise ValueError(f"best_of must be a positive odd number, got {best_of!r}")
    return best_of // 2 + 1


LEADERS_COUNT = 5

DEFAULT_ROUND_POLICY: Tuple[RoundSpec, ...] = (
    RoundSpec(name="Semifinals", series_count=2, best_of=5, codes=("S",)),
    RoundSpec(name="Finals", series_count=1, best_of=7, codes=("F",)),
)


def get_qualification_rule(category: str) -> QualificationRule:
    """Fetch the qualification rule for a category, raising KeyError if missing."""

    key = category.strip().lower()
    if key not in _QUALIFICATION_RULES:
        raise KeyError(f"No qualification rule configured for category={category!r}")
    return _QUALIFICATION_RULES[key]
