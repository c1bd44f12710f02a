# -*- coding: utf-8 -*-
"""
Agrégation par fichier — statistiques d'un extrait DPE.
=======================================================

Transforme les lignes d'un fichier (issues de `normalizer.parse()`)
en un `FileSummary`. Chaque statistique est une réduction indépendante
sur les colonnes normalisées par le `FieldAccessor` du fichier :

    1. Distribution A..G      — pourcentages sur les classes valides
    2. totalCount             — toutes les lignes, classes invalides comprises
    3. Moyennes               — consommation et surface, 0 < v < 10000
    4. % passoires (F + G)    — sur les classes valides
    5. % classe A             — sur les classes valides
    6. Communes               — au moins 5 DPE, score moyen A=7..G=1
    7. Types de bâtiments     — Maison / Appartement / Logement / Autre
    8. Distribution annuelle  — année = 4 premiers caractères de la date

Les valeurs illisibles sont exclues de la statistique concernée,
jamais fatales.

Usage:
    >>> from src.processing.file_aggregator import FileAggregator
    >>> aggregator = FileAggregator(config.aggregation)
    >>> summary = aggregator.summarize(rows, lookup("logements_neufs"))
    >>> summary.passoire_percentage
    0.04
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd

from config.settings import AggregationConfig
from src.processing.dpe_classes import DPE_CLASSES, DPEClass
from src.processing.models import (
    BuildingTypeCount,
    CommuneStat,
    FileSummary,
    YearlyEntry,
    build_distribution,
    empty_counts,
)
from src.processing.normalizer import FieldAccessor
from src.processing.registry import SourceFileSpec

# Ordre de priorité : "maison individuelle en appartement" → Maison
BUILDING_TYPE_BUCKETS: Tuple[Tuple[str, str], ...] = (
    ("maison", "Maison"),
    ("appartement", "Appartement"),
    ("logement", "Logement"),
)
OTHER_BUILDING_TYPE = "Autre"

_SCORES = pd.Series({c.value: c.score for c in DPE_CLASSES})


class FileAggregator:
    """Calcule le FileSummary d'un fichier source.

    Attributes:
        config: Seuils (effectif minimal par commune, bornes des valeurs).
        logger: Logger structuré.
    """

    def __init__(self, config: Optional[AggregationConfig] = None) -> None:
        self.config = config or AggregationConfig()
        self.logger = logging.getLogger("processing.file_aggregator")

    def summarize(self, rows: pd.DataFrame, spec: SourceFileSpec) -> FileSummary:
        """Calcule toutes les statistiques d'un fichier.

        Args:
            rows: Lignes du fichier (sortie de `normalizer.parse()`).
            spec: Description du fichier source.

        Returns:
            FileSummary du fichier.
        """
        accessor = FieldAccessor(spec)
        classes = accessor.dpe_class(rows)
        consumption = accessor.numeric(rows, "consumption")

        counts = self._class_counts(classes)
        valid_total = sum(counts.values())

        summary = FileSummary(
            key=spec.key,
            name=spec.name,
            short_name=spec.short_name,
            category=spec.category,
            period=spec.period,
            total_count=len(rows),
            dpe_distribution=build_distribution(counts),
            avg_consumption=self._bounded_mean(consumption),
            avg_surface=self._bounded_mean(accessor.numeric(rows, "surface")),
            passoire_percentage=_share(
                counts[DPEClass.F] + counts[DPEClass.G], valid_total
            ),
            class_a_percentage=_share(counts[DPEClass.A], valid_total),
            commune_stats=self._commune_stats(
                accessor.commune(rows), classes, consumption,
            ),
            building_types=(
                self._building_types(accessor.building_type(rows))
                if accessor.declares("building_type") else ()
            ),
            yearly_distribution=self._yearly_distribution(accessor.year(rows), classes),
        )

        self.logger.info(
            "  %-32s : %6d DPE (%d classes valides), %d communes",
            spec.key, summary.total_count, valid_total, len(summary.commune_stats),
        )
        return summary

    # ==================================================================
    # Réductions élémentaires
    # ==================================================================

    @staticmethod
    def _class_counts(classes: pd.Series) -> Dict[DPEClass, int]:
        """Compteur A..G sur les classes valides (NaN ignorés)."""
        counts = empty_counts()
        for letter, count in classes.value_counts().items():
            counts[DPEClass(letter)] = int(count)
        return counts

    def _in_bounds(self, values: pd.Series) -> pd.Series:
        """Valeurs strictement comprises entre value_min et value_max."""
        mask = (values > self.config.value_min) & (values < self.config.value_max)
        return values[mask]

    def _bounded_mean(self, values: pd.Series) -> Optional[float]:
        """Moyenne des valeurs retenues, None si aucune."""
        kept = self._in_bounds(values)
        if kept.empty:
            return None
        return float(kept.mean())

    # ==================================================================
    # Communes
    # ==================================================================

    def _commune_stats(
        self,
        communes: pd.Series,
        classes: pd.Series,
        consumption: pd.Series,
    ) -> Tuple[CommuneStat, ...]:
        """Statistiques des communes d'au moins `min_commune_count` DPE.

        L'effectif compte toutes les lignes de la commune ; le score
        moyen ne porte que sur les classes valides et la consommation
        moyenne que sur les valeurs dans les bornes.
        """
        frame = pd.DataFrame({
            "commune": communes,
            "score": classes.map(_SCORES),
            "consumption": consumption.where(
                (consumption > self.config.value_min)
                & (consumption < self.config.value_max)
            ),
        }).dropna(subset=["commune"])

        if frame.empty:
            return ()

        grouped = frame.groupby("commune", sort=False).agg(
            count=("score", "size"),
            avg_score=("score", "mean"),
            avg_consumption=("consumption", "mean"),
        )
        grouped = grouped[grouped["count"] >= self.config.min_commune_count]

        stats = [
            CommuneStat(
                name=str(name),
                count=int(row["count"]),
                avg_score=_optional_float(row["avg_score"]),
                avg_consumption=_optional_float(row["avg_consumption"]),
            )
            for name, row in grouped.iterrows()
        ]
        return tuple(sorted(stats, key=lambda c: -c.count))

    # ==================================================================
    # Types de bâtiments
    # ==================================================================

    @staticmethod
    def bucket_building_type(normalized: str) -> str:
        """Range un type de bâtiment (déjà en minuscules) dans sa famille."""
        for needle, bucket in BUILDING_TYPE_BUCKETS:
            if needle in normalized:
                return bucket
        return OTHER_BUILDING_TYPE

    def _building_types(self, types: pd.Series) -> Tuple[BuildingTypeCount, ...]:
        """Effectifs par famille, les types vides n'étant pas comptés."""
        buckets = types.dropna().map(self.bucket_building_type)
        counts = buckets.value_counts(sort=False)
        entries = [
            BuildingTypeCount(name=str(name), count=int(count))
            for name, count in counts.items()
        ]
        return tuple(sorted(entries, key=lambda b: -b.count))

    # ==================================================================
    # Distribution annuelle
    # ==================================================================

    @staticmethod
    def _yearly_distribution(
        years: pd.Series, classes: pd.Series,
    ) -> Tuple[YearlyEntry, ...]:
        """Distribution A..G par année d'établissement, années croissantes.

        Seules les lignes ayant à la fois une date et une classe valide
        sont comptées.
        """
        frame = pd.DataFrame({"year": years, "dpe": classes}).dropna()
        if frame.empty:
            return ()

        table = pd.crosstab(frame["year"], frame["dpe"])
        entries: List[YearlyEntry] = []
        for year in sorted(table.index):
            row = table.loc[year]
            counts = {
                c: int(row[c.value]) if c.value in row.index else 0
                for c in DPE_CLASSES
            }
            entries.append(YearlyEntry(year=str(year), counts=counts))
        return tuple(entries)


def _share(part: int, total: int) -> float:
    """Part en pourcentage (0 si le dénominateur est nul)."""
    return (part / total) * 100 if total > 0 else 0.0


def _optional_float(value: float) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def summarize(
    rows: pd.DataFrame,
    spec: SourceFileSpec,
    config: Optional[AggregationConfig] = None,
) -> FileSummary:
    """Raccourci : `FileAggregator(config).summarize(rows, spec)`."""
    return FileAggregator(config).summarize(rows, spec)
