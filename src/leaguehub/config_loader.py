"""Persist and load league profiles: per-league knobs kept in a JSON file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from leaguehub.config import (
    DEFAULT_ROUND_POLICY,
    LEADERS_COUNT,
    RoundSpec,
    SheetLayout,
    get_layout,
    override_columns,
)
from leaguehub.leaders import TIE_POLICIES


@dataclass
class LeagueProfile:
    leaders_count: int = LEADERS_COUNT
    tie_policy: str = "collapse_all_ties"
    rounds: List[RoundSpec] = field(default_factory=lambda: list(DEFAULT_ROUND_POLICY))
    column_overrides: Dict[str, Dict[str, int]] = field(default_factory=dict)
    cache_ttl: Optional[float] = None

    def validate(self) -> "LeagueProfile":
        if self.leaders_count < 1:
            raise ValueError("leaders_count must be at least 1")
        if self.tie_policy not in TIE_POLICIES:
            raise ValueError(f"Unknown tie policy {self.tie_policy!r}")
        if not self.rounds:
            raise ValueError("Profile needs at least one playoff round")
        if self.cache_ttl is not None and self.cache_ttl < 0:
            raise ValueError("cache_ttl must be non-negative")
        for kind in self.column_overrides:
            try:
                get_layout(kind)
            except KeyError as exc:
                raise ValueError(str(exc)) from exc
        self.layouts()
        return self

    def layouts(self) -> Dict[str, SheetLayout]:
        return {
            kind: override_columns(get_layout(kind), columns)
            for kind, columns in self.column_overrides.items()
        }

    def round_policy(self) -> Tuple[RoundSpec, ...]:
        return tuple(self.rounds)

    @classmethod
    def load(cls, path: Path) -> "LeagueProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        rounds_data = data.get("rounds")
        try:
            rounds = (
                [
                    RoundSpec(
                        name=item["name"],
                        series_count=int(item["series_count"]),
                        best_of=int(item["best_of"]),
                        codes=tuple(item.get("codes", ())),
                    )
                    for item in rounds_data
                ]
                if rounds_data is not None
                else list(DEFAULT_ROUND_POLICY)
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Invalid round definition in {path}: {exc}") from exc
        profile = cls(
            leaders_count=int(data.get("leaders_count", LEADERS_COUNT)),
            tie_policy=data.get("tie_policy", "collapse_all_ties"),
            rounds=rounds,
            column_overrides={
                kind: {name: int(index) for name, index in columns.items()}
                for kind, columns in data.get("column_overrides", {}).items()
            },
            cache_ttl=data.get("cache_ttl"),
        )
        return profile.validate()

    def save(self, path: Path) -> None:
        payload = {
            "leaders_count": self.leaders_count,
            "tie_policy": self.tie_policy,
            "rounds": [
                {
                    "name": spec.name,
                    "series_count": spec.series_count,
                    "best_of": spec.best_of,
                    "codes": list(spec.codes),
                }
                for spec in self.rounds
            ],
            "column_overrides": self.column_overrides,
            "cache_ttl": self.cache_ttl,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
