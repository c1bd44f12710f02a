# -*- coding: utf-8 -*-
"""
Agrégation multi-fichiers — statistiques globales Corse.
========================================================

Fusionne les `FileSummary` de tous les fichiers chargés en un
`AggregateResult` :

    - totalDPE            : somme des totalCount (classes invalides comprises)
    - globalDistribution  : somme des compteurs A..G, pourcentages recalculés
                            sur le nouveau total des classes valides
    - byCategory          : existant / neuf / tertiaire (toujours présents)
    - byPeriod            : avant_2021 / depuis_2021 (toujours présents)
    - communeStats        : communes fusionnées par nom, triées par effectif

Les moyennes d'une commune présente dans plusieurs fichiers sont la
moyenne simple des moyennes par fichier (non pondérée par l'effectif),
ce qui reproduit le comportement des tableaux de bord existants.
`weighted_commune_average()` fournit la variante pondérée.

L'agrégation n'est lancée qu'une fois TOUS les fichiers résumés : pas
de réduction incrémentale.

Usage:
    >>> result = CrossFileAggregator().aggregate(summaries)
    >>> result.by_category["neuf"].count
    5038
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from src.processing.dpe_classes import DPEClass
from src.processing.models import (
    AggregateResult,
    Breakdown,
    CommuneStat,
    FileSummary,
    build_distribution,
    empty_counts,
)
from src.processing.registry import CATEGORIES, PERIODS


@dataclass
class _CommuneAccumulator:
    """Valeurs d'une commune collectées sur l'ensemble des fichiers."""
    name: str
    counts: List[int] = field(default_factory=list)
    scores: List[float] = field(default_factory=list)
    consumptions: List[float] = field(default_factory=list)


class CrossFileAggregator:
    """Fusionne les résumés de fichiers en un résultat global."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("processing.cross_aggregator")

    def aggregate(self, summaries: Sequence[FileSummary]) -> AggregateResult:
        """Construit le résultat global.

        Args:
            summaries: Résumés de tous les fichiers chargés.

        Returns:
            AggregateResult prêt pour la couche de présentation.
        """
        summaries = tuple(summaries)

        global_counts = empty_counts()
        for summary in summaries:
            _add_counts(global_counts, summary.class_counts)

        result = AggregateResult(
            total_dpe=sum(s.total_count for s in summaries),
            global_distribution=build_distribution(global_counts),
            by_category=self._breakdown(summaries, CATEGORIES, "category"),
            by_period=self._breakdown(summaries, PERIODS, "period"),
            commune_stats=self._merge_communes(summaries),
            files=summaries,
        )

        self.logger.info(
            "Agrégation : %d fichiers, %d DPE, %d communes",
            len(summaries), result.total_dpe, len(result.commune_stats),
        )
        return result

    @staticmethod
    def _breakdown(
        summaries: Tuple[FileSummary, ...],
        keys: Sequence[str],
        attribute: str,
    ) -> Dict[str, Breakdown]:
        """Effectif et compteur A..G par valeur de `attribute`.

        Toutes les clés attendues sont présentes, même à zéro.
        """
        totals = {key: 0 for key in keys}
        counts = {key: empty_counts() for key in keys}
        for summary in summaries:
            key = getattr(summary, attribute)
            totals[key] += summary.total_count
            _add_counts(counts[key], summary.class_counts)
        return {key: Breakdown(count=totals[key], distribution=counts[key]) for key in keys}

    @staticmethod
    def _merge_communes(summaries: Tuple[FileSummary, ...]) -> Tuple[CommuneStat, ...]:
        """Fusionne les communes de tous les fichiers par nom."""
        accumulators: Dict[str, _CommuneAccumulator] = {}
        for summary in summaries:
            for commune in summary.commune_stats:
                acc = accumulators.setdefault(commune.name, _CommuneAccumulator(commune.name))
                acc.counts.append(commune.count)
                if commune.avg_score is not None:
                    acc.scores.append(commune.avg_score)
                if commune.avg_consumption is not None:
                    acc.consumptions.append(commune.avg_consumption)

        merged = [
            CommuneStat(
                name=acc.name,
                count=sum(acc.counts),
                avg_score=_mean(acc.scores),
                avg_consumption=_mean(acc.consumptions),
            )
            for acc in accumulators.values()
        ]
        return tuple(sorted(merged, key=lambda c: -c.count))


def weighted_commune_average(
    stats: Sequence[CommuneStat], attribute: str = "avg_score",
) -> Optional[float]:
    """Moyenne pondérée par l'effectif : sum(avg_i * count_i) / sum(count_i).

    Les entrées dont la moyenne est None sont ignorées.
    """
    kept = [s for s in stats if getattr(s, attribute) is not None]
    weights = np.array([s.count for s in kept], dtype=float)
    if weights.sum() == 0:
        return None
    values = np.array([getattr(s, attribute) for s in kept], dtype=float)
    return float(np.average(values, weights=weights))


def aggregate(summaries: Sequence[FileSummary]) -> AggregateResult:
    """Raccourci : `CrossFileAggregator().aggregate(summaries)`."""
    return CrossFileAggregator().aggregate(summaries)


def _add_counts(target: Dict[DPEClass, int], source: Dict[DPEClass, int]) -> None:
    for dpe_class, count in source.items():
        target[dpe_class] += count


def _mean(values: List[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None
