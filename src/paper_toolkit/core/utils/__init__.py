"""
Utils Package

Bilingual text normalization and serialization helpers.
"""

from .bilingual import BilingualText, normalize_bilingual, has_secondary_script

__all__ = [
    "BilingualText",
    "normalize_bilingual",
    "has_secondary_script",
]
