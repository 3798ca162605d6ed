"""
Module: composer.layout

Purpose:
    Layout profiles and the caps they impose on question counts.

Key Functions:
    - get_layout_profile(): Canonical profile lookup (aliases accepted)
    - resolve_budgets(): Clamp requested criteria before selection
    - enforce_layout_caps(): Truncate composed sections after selection

Key Classes:
    - Adjustment, BudgetResolution: Pre-selection clamping report
    - LayoutTruncation: Post-selection truncation report
"""

from .profiles import (
    COMBINED,
    LAYOUT_ALIASES,
    LAYOUT_PROFILES,
    PAIRED_SHEET,
    SEPARATE,
    TRIPLED_SHEET,
    available_layouts,
    get_layout_profile,
)
from .budget import Adjustment, BudgetResolution, allocate_proportionally, resolve_budgets
from .caps import LayoutTruncation, enforce_layout_caps, truncate_section

__all__ = [
    # Profiles
    "COMBINED",
    "LAYOUT_ALIASES",
    "LAYOUT_PROFILES",
    "PAIRED_SHEET",
    "SEPARATE",
    "TRIPLED_SHEET",
    "available_layouts",
    "get_layout_profile",
    # Budget
    "Adjustment",
    "BudgetResolution",
    "allocate_proportionally",
    "resolve_budgets",
    # Caps
    "LayoutTruncation",
    "enforce_layout_caps",
    "truncate_section",
]
