# -*- coding: utf-8 -*-
"""Jeux de données embarqués (résultat précalculé de secours)."""

from src.data.fallback import FALLBACK_DATASET, load_fallback

__all__ = ["FALLBACK_DATASET", "load_fallback"]
