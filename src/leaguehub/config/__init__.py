"""Configuration helpers for sheet layouts and league rules."""

from .rules import (
    DEFAULT_ROUND_POLICY,
    LEADERS_COUNT,
    QualificationRule,
    RoundSpec,
    clinch_threshold,
    get_qualification_rule,
)
from .sheets import SheetLayout, get_layout, iter_layouts, override_columns, validate_layout

__all__ = [
    "DEFAULT_ROUND_POLICY",
    "LEADERS_COUNT",
    "QualificationRule",
    "RoundSpec",
    "SheetLayout",
    "clinch_threshold",
    "get_layout",
    "get_qualification_rule",
    "iter_layouts",
    "override_columns",
    "validate_layout",
]
