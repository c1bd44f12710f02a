# -*- coding: utf-8 -*-
"""
Exceptions du pipeline d'agrégation DPE.
========================================

Hiérarchie :
    DpeDataError
    ├── UnknownSourceKey     — clé absente du registre (fatal pour ce fichier)
    ├── MalformedInputError  — CSV illisible (fichier ignoré, on continue)
    └── NoUsableDataError    — aucun fichier exploitable (fatal pour le run)

Les défauts au niveau d'une ligne (nombre illisible, colonne optionnelle
absente) ne lèvent jamais d'exception : la valeur est simplement exclue
de la statistique concernée.
"""

from __future__ import annotations

from typing import List, Optional


class DpeDataError(Exception):
    """Classe de base des erreurs du pipeline DPE."""


class UnknownSourceKey(DpeDataError, KeyError):
    """Clé de fichier source inconnue du registre."""

    def __init__(self, key: str, available: Optional[List[str]] = None) -> None:
        self.key = key
        self.available = available or []
        super().__init__(
            f"Source inconnue : '{key}'. Disponibles : {self.available}"
        )

    def __str__(self) -> str:
        # KeyError.__str__ ajoute des guillemets autour du message
        return str(self.args[0])


class MalformedInputError(DpeDataError, ValueError):
    """Le texte ne peut pas être découpé en lignes délimitées."""

    def __init__(self, source_key: str, reason: str) -> None:
        self.source_key = source_key
        self.reason = reason
        super().__init__(f"CSV mal formé pour '{source_key}' : {reason}")


class NoUsableDataError(DpeDataError, RuntimeError):
    """Aucun fichier n'a pu être chargé : pas de résultat possible."""

    def __init__(self, errors: Optional[List[str]] = None) -> None:
        self.errors = errors or []
        super().__init__(
            "No data files could be loaded"
            + (f" ({len(self.errors)} erreurs)" if self.errors else "")
        )
