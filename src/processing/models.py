# -*- coding: utf-8 -*-
"""
Structures de sortie des agrégations DPE.
=========================================

Toutes les structures sont des dataclasses figées, créées à neuf à
chaque exécution. `to_dict()` produit la forme JSON consommée par la
couche de présentation (noms de champs camelCase : `totalDPE`,
`dpeDistribution`, `avgScore`...).

Hiérarchie :
    AggregateResult
    ├── globalDistribution : [DistributionEntry] (A..G)
    ├── byCategory / byPeriod : {clé: Breakdown}
    ├── communeStats : [CommuneStat]
    └── files : [FileSummary]
            ├── dpeDistribution : [DistributionEntry]
            ├── communeStats : [CommuneStat]
            ├── buildingTypes : [BuildingTypeCount]
            └── yearlyDistribution : [YearlyEntry]
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

from src.processing.dpe_classes import DPE_CLASSES, DPEClass

_ONE_DECIMAL = Decimal("0.1")


def format_percentage(count: int, total: int) -> str:
    """Pourcentage à une décimale, arrondi au demi supérieur.

    L'arrondi porte sur la valeur binaire exacte du flottant, comme
    `Number.prototype.toFixed(1)` côté navigateur.

    Args:
        count: Effectif de la classe.
        total: Somme des effectifs des sept classes.

    Returns:
        Chaîne "66.7", ou "0" si total est nul.
    """
    if total <= 0:
        return "0"
    value = (count / total) * 100
    return str(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def empty_counts() -> Dict[DPEClass, int]:
    """Compteur A..G initialisé à zéro."""
    return {c: 0 for c in DPE_CLASSES}


def counts_to_dict(counts: Mapping[DPEClass, int]) -> Dict[str, int]:
    return {c.value: counts.get(c, 0) for c in DPE_CLASSES}


@dataclass(frozen=True)
class DistributionEntry:
    """Effectif et pourcentage d'une classe DPE."""
    dpe_class: DPEClass
    count: int
    percentage: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class": self.dpe_class.value,
            "count": self.count,
            "percentage": self.percentage,
        }


def build_distribution(counts: Mapping[DPEClass, int]) -> Tuple[DistributionEntry, ...]:
    """Construit la distribution complète A..G à partir d'un compteur.

    Les pourcentages sont calculés sur la somme des sept classes.
    """
    total = sum(counts.get(c, 0) for c in DPE_CLASSES)
    return tuple(
        DistributionEntry(c, counts.get(c, 0), format_percentage(counts.get(c, 0), total))
        for c in DPE_CLASSES
    )


@dataclass(frozen=True)
class CommuneStat:
    """Statistiques d'une commune (au moins `min_commune_count` DPE).

    Attributes:
        name: Nom (ou code INSEE) normalisé en majuscules.
        count: Nombre de DPE, classes invalides comprises.
        avg_score: Score moyen (A=7..G=1), None si aucune classe valide.
        avg_consumption: Consommation moyenne, None si aucune valeur retenue.
    """
    name: str
    count: int
    avg_score: Optional[float]
    avg_consumption: Optional[float]

    @property
    def average_class(self) -> Optional[DPEClass]:
        if self.avg_score is None:
            return None
        return DPEClass.from_score(self.avg_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "avgScore": self.avg_score,
            "avgConsumption": self.avg_consumption,
        }


@dataclass(frozen=True)
class BuildingTypeCount:
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass(frozen=True)
class YearlyEntry:
    """Distribution A..G des DPE établis une année donnée."""
    year: str
    counts: Mapping[DPEClass, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, **counts_to_dict(self.counts), "total": self.total}


@dataclass(frozen=True)
class FileSummary:
    """Statistiques d'un fichier source.

    Attributes:
        key: Clé du fichier dans le registre.
        name: Libellé long.
        short_name: Libellé court.
        category: Catégorie de bâtiments.
        period: Période de la méthode DPE.
        total_count: Nombre de lignes, classes invalides comprises.
        dpe_distribution: Distribution A..G (classes valides uniquement).
        avg_consumption: Consommation moyenne (0 < v < 10000) ou None.
        avg_surface: Surface moyenne (0 < v < 10000) ou None.
        passoire_percentage: Part des classes F et G (0-100).
        class_a_percentage: Part de la classe A (0-100).
        commune_stats: Communes triées par effectif décroissant.
        building_types: Types de bâtiments triés par effectif décroissant.
        yearly_distribution: Distribution par année, croissante.
    """
    key: str
    name: str
    short_name: str
    category: str
    period: str
    total_count: int
    dpe_distribution: Tuple[DistributionEntry, ...]
    avg_consumption: Optional[float]
    avg_surface: Optional[float]
    passoire_percentage: float
    class_a_percentage: float
    commune_stats: Tuple[CommuneStat, ...] = ()
    building_types: Tuple[BuildingTypeCount, ...] = ()
    yearly_distribution: Tuple[YearlyEntry, ...] = ()

    @property
    def class_counts(self) -> Dict[DPEClass, int]:
        return {entry.dpe_class: entry.count for entry in self.dpe_distribution}

    @property
    def valid_count(self) -> int:
        """Nombre de lignes dont la classe DPE est valide."""
        return sum(entry.count for entry in self.dpe_distribution)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "shortName": self.short_name,
            "category": self.category,
            "period": self.period,
            "totalCount": self.total_count,
            "dpeDistribution": [e.to_dict() for e in self.dpe_distribution],
            "avgConsumption": self.avg_consumption,
            "avgSurface": self.avg_surface,
            "passoirePercentage": self.passoire_percentage,
            "classAPercentage": self.class_a_percentage,
            "communeStats": [c.to_dict() for c in self.commune_stats],
            "buildingTypes": [b.to_dict() for b in self.building_types],
            "yearlyDistribution": [y.to_dict() for y in self.yearly_distribution],
        }


@dataclass(frozen=True)
class Breakdown:
    """Effectif total et compteur A..G d'une catégorie ou d'une période."""
    count: int
    distribution: Mapping[DPEClass, int]

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "distribution": counts_to_dict(self.distribution)}


@dataclass(frozen=True)
class AggregateResult:
    """Résultat global transmis à la couche de présentation."""
    total_dpe: int
    global_distribution: Tuple[DistributionEntry, ...]
    by_category: Mapping[str, Breakdown]
    by_period: Mapping[str, Breakdown]
    commune_stats: Tuple[CommuneStat, ...]
    files: Tuple[FileSummary, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalDPE": self.total_dpe,
            "globalDistribution": [e.to_dict() for e in self.global_distribution],
            "byCategory": {k: v.to_dict() for k, v in self.by_category.items()},
            "byPeriod": {k: v.to_dict() for k, v in self.by_period.items()},
            "communeStats": [c.to_dict() for c in self.commune_stats],
            "files": [f.to_dict() for f in self.files],
        }
