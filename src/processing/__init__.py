# -*- coding: utf-8 -*-
"""
Data Processing Package — Normalisation et agrégation des DPE.
==============================================================

Ce package contient le cœur du traitement :

    - registry.py          : Description des cinq extraits CSV (colonnes, catégorie, période)
    - normalizer.py        : Texte CSV → lignes, lecture des champs logiques
    - file_aggregator.py   : Lignes d'un fichier → FileSummary
    - cross_aggregator.py  : FileSummary[] → AggregateResult
    - models.py            : Structures de sortie et forme JSON
    - dpe_classes.py       : Énumération A..G, scores, libellés
    - errors.py            : Exceptions du pipeline

Usage :
    >>> from src.processing import lookup, parse, FileAggregator, CrossFileAggregator
    >>> spec = lookup("logements_neufs")
    >>> summary = FileAggregator().summarize(parse(text, spec), spec)
    >>> result = CrossFileAggregator().aggregate([summary])
"""

from src.processing.cross_aggregator import CrossFileAggregator
from src.processing.dpe_classes import DPE_CLASSES, DPEClass
from src.processing.errors import (
    DpeDataError,
    MalformedInputError,
    NoUsableDataError,
    UnknownSourceKey,
)
from src.processing.file_aggregator import FileAggregator
from src.processing.models import AggregateResult, FileSummary
from src.processing.normalizer import FieldAccessor, parse
from src.processing.registry import SourceFileSpec, lookup

__all__ = [
    "AggregateResult",
    "CrossFileAggregator",
    "DPEClass",
    "DPE_CLASSES",
    "DpeDataError",
    "FieldAccessor",
    "FileAggregator",
    "FileSummary",
    "MalformedInputError",
    "NoUsableDataError",
    "SourceFileSpec",
    "UnknownSourceKey",
    "lookup",
    "parse",
]
