"""Centralized selection constants.

Tuning values used by the composer. Having these in one place makes the
selection behaviour easy to adjust and documents each value.
"""

from __future__ import annotations

# Candidates fetched per requested question in randomized mode, so the
# chapter balancer has enough material from every chapter
OVERFETCH_FACTOR = 3

# Worker threads for per-type selection
DEFAULT_MAX_WORKERS = 4
