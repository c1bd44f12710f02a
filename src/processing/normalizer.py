# -*- coding: utf-8 -*-
"""
Normalisation des extraits CSV DPE.
===================================

Deux responsabilités :

1. **parse()** — découpe le texte brut d'un extrait en lignes
   (DataFrame, une ligne par DPE, toutes les cellules en `str`).
   La première ligne fournit les noms de colonnes, les lignes vides
   sont ignorées. Un échappement de délimiteur invalide fait échouer
   tout le fichier (MalformedInputError) : aucune récupération
   partielle n'est tentée.

2. **FieldAccessor** — lit les champs logiques d'un fichier
   (classe DPE, commune, consommation...) à travers la table de
   correspondance de son SourceFileSpec. La table est résolue une
   seule fois par fichier ; une colonne absente du CSV se lit comme
   une colonne entièrement vide.

Règles de normalisation :
    - classe DPE / GES : trim + majuscules, NaN si hors A..G
    - commune          : trim + majuscules, NaN si vide
    - type de bâtiment : trim + minuscules, NaN si vide
    - nombres          : plus long préfixe décimal (sémantique parseFloat),
                         NaN si aucun
    - année            : 4 premiers caractères de la date, NaN si vide

Usage:
    >>> spec = lookup("logements_neufs")
    >>> rows = parse(csv_text, spec)
    >>> accessor = FieldAccessor(spec)
    >>> accessor.dpe_class(rows).value_counts()
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import fields
from typing import Dict, Optional

import pandas as pd

from src.processing.dpe_classes import normalize_class_series
from src.processing.errors import MalformedInputError
from src.processing.registry import ColumnMap, SourceFileSpec

logger = logging.getLogger("processing.normalizer")

# Préfixe décimal accepté par parseFloat : "12.5kWh" → 12.5, "abc" → NaN
_FLOAT_PREFIX = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"


def parse(raw_text: str, spec: SourceFileSpec, delimiter: str = ",") -> pd.DataFrame:
    """Découpe un extrait CSV en lignes.

    Args:
        raw_text: Contenu texte complet du fichier (en-tête compris).
        spec: Description du fichier (utilisée pour les messages).
        delimiter: Séparateur de champs.

    Returns:
        DataFrame dont les colonnes sont celles de l'en-tête ; l'ordre
        des lignes suit l'ordre du texte. Les cellules manquantes
        valent "".

    Raises:
        MalformedInputError: Si le texte ne peut pas être découpé
            (guillemet non fermé, nombre de champs incohérent...).
    """
    text = raw_text.lstrip("\ufeff")
    if not text.strip():
        logger.debug("  %s : texte vide, aucune ligne", spec.key)
        return pd.DataFrame()

    try:
        rows = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            quoting=csv.QUOTE_MINIMAL,
        )
    except (pd.errors.ParserError, csv.Error) as exc:
        raise MalformedInputError(spec.key, str(exc).strip()) from exc
    except pd.errors.EmptyDataError:
        return pd.DataFrame()

    rows = rows.fillna("")
    logger.debug(
        "  %s : %d lignes × %d colonnes", spec.key, len(rows), len(rows.columns),
    )
    return rows


class FieldAccessor:
    """Lecture des champs logiques d'un fichier à travers son ColumnMap.

    Attributes:
        spec: Description du fichier source.
        columns: Champ logique → colonne physique (None si non fourni).
    """

    def __init__(self, spec: SourceFileSpec) -> None:
        self.spec = spec
        self.columns: Dict[str, Optional[str]] = {
            f.name: getattr(spec.columns, f.name) for f in fields(ColumnMap)
        }

    def declares(self, field_name: str) -> bool:
        """Indique si le fichier déclare une colonne pour ce champ."""
        return self.columns[field_name] is not None

    def raw(self, rows: pd.DataFrame, field_name: str) -> pd.Series:
        """Colonne brute d'un champ logique ("" pour les cellules absentes)."""
        column = self.columns[field_name]
        if column is None or column not in rows.columns:
            return pd.Series("", index=rows.index, dtype=object)
        return rows[column].fillna("").astype(str)

    def dpe_class(self, rows: pd.DataFrame) -> pd.Series:
        return normalize_class_series(self.raw(rows, "dpe_class"))

    def numeric(self, rows: pd.DataFrame, field_name: str) -> pd.Series:
        """Valeurs numériques d'un champ (NaN si illisible)."""
        prefix = self.raw(rows, field_name).str.extract(_FLOAT_PREFIX, expand=False)
        return pd.to_numeric(prefix, errors="coerce").astype(float)

    def commune(self, rows: pd.DataFrame) -> pd.Series:
        names = self.raw(rows, "commune").str.strip().str.upper()
        return names.where(names != "")

    def building_type(self, rows: pd.DataFrame) -> pd.Series:
        types = self.raw(rows, "building_type").str.strip().str.lower()
        return types.where(types != "")

    def year(self, rows: pd.DataFrame) -> pd.Series:
        """Année d'établissement (4 premiers caractères de la date)."""
        dates = self.raw(rows, "established_date")
        return dates.str[:4].where(dates != "")
