"""Sheet layouts: where each record type lives and which column holds which field."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SheetLayout:
    kind: str
    title: str
    playoff_title: Optional[str]
    identity_fields: Tuple[str, ...]
    columns: Mapping[str, int]
    start_row: int
    max_rows: int
    start_col: str = "A"
    end_col: str = "Z"

    def index(self, name: str) -> int:
        try:
            return self.columns[name]
        except KeyError:
            raise KeyError(f"Layout {self.kind!r} has no column for field {name!r}") from None

    def title_for(self, playoffs: bool = False) -> str:
        if not playoffs:
            return self.title
        if self.playoff_title is None:
            raise ValueError(f"Layout {self.kind!r} has no playoff sheet")
        return self.playoff_title

    def a1_range(self, playoffs: bool = False) -> str:
        """Range string in the form ``'Title'!A2:Z100`` for the data rows."""

        end_row = self.start_row + self.max_rows - 1
        return f"'{self.title_for(playoffs)}'!{self.start_col}{self.start_row}:{self.end_col}{end_row}"


_BATTING_FIELDS = ("ab", "h", "hr", "rbi", "bb", "k", "rob", "dp", "tb")
_PITCHING_FIELDS = ("ip", "bf", "h_allowed", "hr_allowed", "r", "bb_allowed", "k_pitched")
_FIELDING_FIELDS = ("np", "e", "sb", "cs")

REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    "players": ("name", "team", "gp", *_BATTING_FIELDS, "w", "l", "sv", *_PITCHING_FIELDS, *_FIELDING_FIELDS),
    "teams": ("name", "captain", "gp", "wins", "losses", *_BATTING_FIELDS, *_PITCHING_FIELDS, "sv", *_FIELDING_FIELDS),
    "schedule": ("week", "away_team", "home_team", "away_score", "home_score"),
    "standings": ("rank", "team", "wins", "losses", "runs_scored", "runs_allowed"),
}


def _column_number(letter: str) -> int:
    number = 0
    for char in letter.upper():
        if not "A" <= char <= "Z":
            raise ValueError(f"Invalid column letter {letter!r}")
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def validate_layout(layout: SheetLayout) -> SheetLayout:
    """Check a layout once, at load time, so mapping never reads the wrong cells."""

    required = REQUIRED_FIELDS.get(layout.kind)
    if required is None:
        raise ValueError(f"Unknown sheet kind {layout.kind!r}")
    missing = [name for name in required if name not in layout.columns]
    if missing:
        raise ValueError(f"Layout {layout.kind!r} is missing columns: {', '.join(missing)}")
    for name in layout.identity_fields:
        if name not in layout.columns:
            raise ValueError(f"Layout {layout.kind!r} identity field {name!r} has no column")

    width = _column_number(layout.end_col) - _column_number(layout.start_col) + 1
    seen: Dict[int, str] = {}
    for name, index in layout.columns.items():
        if index < 0 or index >= width:
            raise ValueError(
                f"Layout {layout.kind!r} column {name!r}={index} is outside {layout.start_col}:{layout.end_col}"
            )
        if index in seen:
            raise ValueError(f"Layout {layout.kind!r} maps both {seen[index]!r} and {name!r} to column {index}")
        seen[index] = name
    if layout.start_row < 1 or layout.max_rows < 1:
        raise ValueError(f"Layout {layout.kind!r} needs a positive start_row and max_rows")
    return layout


_SHEET_LAYOUTS: Dict[str, SheetLayout] = {
    "players": SheetLayout(
        kind="players",
        title="Players",
        playoff_title="Playoff Players",
        identity_fields=("name",),
        columns={
            "name": 0,
            "team": 1,
            "gp": 2,
            "ab": 3,
            "h": 4,
            "hr": 5,
            "rbi": 6,
            "bb": 7,
            "k": 8,
            "rob": 9,
            "dp": 10,
            "tb": 11,
            "w": 12,
            "l": 13,
            "sv": 14,
            "ip": 15,
            "bf": 16,
            "h_allowed": 17,
            "hr_allowed": 18,
            "r": 19,
            "bb_allowed": 20,
            "k_pitched": 21,
            "np": 22,
            "e": 23,
            "sb": 24,
            "cs": 25,
        },
        start_row=2,
        max_rows=100,
    ),
    "teams": SheetLayout(
        kind="teams",
        title="Teams",
        playoff_title="Playoff Teams",
        identity_fields=("name",),
        columns={
            "name": 0,
            "captain": 1,
            "gp": 2,
            "wins": 3,
            "losses": 4,
            "ab": 5,
            "h": 6,
            "hr": 7,
            "rbi": 8,
            "bb": 9,
            "k": 10,
            "rob": 11,
            "dp": 12,
            "tb": 13,
            "ip": 14,
            "bf": 15,
            "h_allowed": 16,
            "hr_allowed": 17,
            "r": 18,
            "bb_allowed": 19,
            "k_pitched": 20,
            "sv": 21,
            "np": 22,
            "e": 23,
            "sb": 24,
            "cs": 25,
        },
        start_row=2,
        max_rows=20,
    ),
    "schedule": SheetLayout(
        kind="schedule",
        title="Schedule",
        playoff_title="Playoff Schedule",
        identity_fields=("week", "away_team", "home_team"),
        columns={
            "week": 0,
            "away_team": 1,
            "home_team": 2,
            "away_score": 3,
            "home_score": 4,
            "winner": 5,
            "loser": 6,
            "mvp": 7,
            "winning_pitcher": 8,
            "losing_pitcher": 9,
            "save_pitcher": 10,
            "box_score_url": 11,
        },
        start_row=2,
        max_rows=100,
        end_col="L",
    ),
    "standings": SheetLayout(
        kind="standings",
        title="Standings",
        playoff_title=None,
        identity_fields=("team",),
        columns={
            "rank": 0,
            "team": 1,
            "wins": 2,
            "losses": 3,
            "win_pct": 4,
            "runs_scored": 5,
            "runs_allowed": 6,
            "run_differential": 7,
            "h2h_note": 8,
        },
        # Row 1 is the title, row 2 is blank and row 3 holds headers.
        start_row=4,
        max_rows=20,
        end_col="I",
    ),
}

for _layout in _SHEET_LAYOUTS.values():
    validate_layout(_layout)


def iter_layouts() -> Iterable[SheetLayout]:
    """Return an iterator of all configured sheet layouts."""

    return _SHEET_LAYOUTS.values()


def get_layout(kind: str) -> SheetLayout:
    """Fetch the layout for a record kind, raising KeyError if missing."""

    key = kind.strip().lower()
    if key not in _SHEET_LAYOUTS:
        raise KeyError(f"No sheet layout configured for kind={kind!r}")
    return _SHEET_LAYOUTS[key]


def override_columns(layout: SheetLayout, columns: Mapping[str, int]) -> SheetLayout:
    """Return a validated copy of ``layout`` with some column indices replaced."""

    merged = dict(layout.columns)
    merged.update({name: int(index) for name, index in columns.items()})
    return validate_layout(replace(layout, columns=merged))
