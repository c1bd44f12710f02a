# -*- coding: utf-8 -*-
"""
Étiquettes DPE — énumération fermée A..G.
==========================================

Le DPE classe un bâtiment de A (meilleure performance) à G
(« passoire thermique »). Toute valeur brute est normalisée à la
frontière (trim + majuscules) via `DPEClass.parse()` ; une valeur hors
A..G devient None et ne participe à aucune statistique par classe.

Score de performance utilisé pour les moyennes par commune :
    A=7, B=6, C=5, D=4, E=3, F=2, G=1

Usage:
    >>> DPEClass.parse(" c ")
    <DPEClass.C: 'C'>
    >>> DPEClass.parse("Z") is None
    True
    >>> DPEClass.from_score(6.4)
    <DPEClass.B: 'B'>
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

import pandas as pd


class DPEClass(Enum):
    """Classe énergétique DPE (ordre de déclaration = A..G)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"

    @classmethod
    def parse(cls, raw: Any) -> Optional[DPEClass]:
        """Normalise une valeur brute en classe DPE.

        Args:
            raw: Valeur de cellule (str, NaN, None...).

        Returns:
            La classe correspondante, ou None si la valeur est invalide.
        """
        if raw is None or not isinstance(raw, str):
            return None
        return _BY_VALUE.get(raw.strip().upper())

    @classmethod
    def from_score(cls, score: float) -> DPEClass:
        """Classe la plus proche d'un score moyen (1..7)."""
        for threshold, dpe_class in _SCORE_THRESHOLDS:
            if score >= threshold:
                return dpe_class
        return cls.G

    @property
    def score(self) -> int:
        return _SCORES[self]

    @property
    def label(self) -> str:
        return DPE_LABELS[self]

    @property
    def consumption_range(self) -> str:
        """Plage de consommation (kWh/m².an) correspondant à la classe."""
        return DPE_RANGES[self]

    @property
    def ges_range(self) -> str:
        return GES_RANGES[self]

    @property
    def is_passoire(self) -> bool:
        """F et G sont les « passoires thermiques »."""
        return self in (DPEClass.F, DPEClass.G)


DPE_CLASSES: Tuple[DPEClass, ...] = tuple(DPEClass)

_BY_VALUE: Dict[str, DPEClass] = {c.value: c for c in DPEClass}

_SCORES: Dict[DPEClass, int] = {
    c: len(DPE_CLASSES) - i for i, c in enumerate(DPE_CLASSES)
}

_SCORE_THRESHOLDS = (
    (6.5, DPEClass.A),
    (5.5, DPEClass.B),
    (4.5, DPEClass.C),
    (3.5, DPEClass.D),
    (2.5, DPEClass.E),
    (1.5, DPEClass.F),
)

DPE_LABELS: Dict[DPEClass, str] = {
    DPEClass.A: "Excellent",
    DPEClass.B: "Très bon",
    DPEClass.C: "Bon",
    DPEClass.D: "Moyen",
    DPEClass.E: "Insuffisant",
    DPEClass.F: "Très insuffisant",
    DPEClass.G: "Passoire thermique",
}

# Consommation en énergie primaire (kWh/m².an)
DPE_RANGES: Dict[DPEClass, str] = {
    DPEClass.A: "≤ 70",
    DPEClass.B: "71-110",
    DPEClass.C: "111-180",
    DPEClass.D: "181-250",
    DPEClass.E: "251-330",
    DPEClass.F: "331-420",
    DPEClass.G: "> 420",
}

# Émissions de gaz à effet de serre (kg CO2/m².an)
GES_RANGES: Dict[DPEClass, str] = {
    DPEClass.A: "≤ 6",
    DPEClass.B: "7-11",
    DPEClass.C: "12-30",
    DPEClass.D: "31-50",
    DPEClass.E: "51-70",
    DPEClass.F: "71-100",
    DPEClass.G: "> 100",
}


def normalize_class_series(raw: pd.Series) -> pd.Series:
    """Version vectorisée de `DPEClass.parse()`.

    Args:
        raw: Colonne brute (chaînes, éventuellement vides ou NaN).

    Returns:
        Série de lettres "A".."G" ; NaN pour toute valeur invalide.
    """
    letters = raw.map(lambda v: v.strip().upper() if isinstance(v, str) else None)
    return letters.where(letters.isin(list(_BY_VALUE)))
