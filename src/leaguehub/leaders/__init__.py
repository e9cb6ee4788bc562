"""Qualification filtering and leaderboard construction."""

from .board import (
    TIE_POLICIES,
    RankGroup,
    build_leaderboard,
    collapse_all_ties,
    collapse_boundary_ties,
    collapse_never,
    get_tie_policy,
    rank_groups,
)
from .categories import (
    StatDefinition,
    build_category_leaders,
    build_stat_leaders,
    get_stat,
    iter_categories,
    iter_stats,
)
from .qualification import average_games_played, filter_qualified, qualification_threshold

__all__ = [
    "RankGroup",
    "StatDefinition",
    "TIE_POLICIES",
    "average_games_played",
    "build_category_leaders",
    "build_leaderboard",
    "build_stat_leaders",
    "collapse_all_ties",
    "collapse_boundary_ties",
    "collapse_never",
    "filter_qualified",
    "get_stat",
    "get_tie_policy",
    "iter_categories",
    "iter_stats",
    "qualification_threshold",
    "rank_groups",
]
