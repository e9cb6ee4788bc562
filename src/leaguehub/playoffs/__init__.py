"""Playoff series grouping and bracket assembly."""

from .bracket import build_bracket, build_bracket_from_games, resolve_series
from .series import group_series

__all__ = ["build_bracket", "build_bracket_from_games", "group_series", "resolve_series"]
