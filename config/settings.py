# -*- coding: utf-8 -*-
"""
Configuration centralisée du projet DPE Corse.
==============================================

Regroupe TOUS les paramètres du projet en un seul endroit.
Les valeurs sont chargées depuis le fichier .env (via python-dotenv)
avec des valeurs par défaut sensées.

Architecture :
    ProjectConfig
    ├── SourceConfig       — Emplacement des CSV (répertoire ou URL), réseau
    └── AggregationConfig  — Seuils des statistiques (communes, bornes)

Usage:
    >>> from config.settings import config
    >>> print(config.source.data_dir)
    data/raw/dpe
    >>> print(config.aggregation.min_commune_count)
    5

Extensibilité:
    Pour ajouter un nouveau paramètre :
    1. Ajouter l'attribut dans la dataclass appropriée
    2. Ajouter la variable d'environnement correspondante dans .env.example
    3. Mapper la variable dans from_env() si nécessaire
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Charger le .env dès l'import du module
load_dotenv()


# =============================================================================
# Sous-configurations thématiques
# =============================================================================

@dataclass(frozen=True)
class SourceConfig:
    """Emplacement des extraits CSV et paramètres réseau.

    Les fichiers sont lus sur disque sous `data_dir`, sauf si `base_url`
    est renseignée : ils sont alors téléchargés en HTTP
    (`base_url` + nom de fichier).

    Attributes:
        data_dir: Répertoire contenant les cinq extraits CSV.
        base_url: URL de base optionnelle (ex: "https://host/data/").
        request_timeout: Timeout HTTP en secondes par requête.
        max_retries: Nombre max de tentatives sur erreur serveur.
        retry_backoff_factor: Facteur multiplicatif entre les retries.
    """
    data_dir: Path = Path("data/raw/dpe")
    base_url: Optional[str] = None
    request_timeout: int = 30
    max_retries: int = 3
    retry_backoff_factor: float = 1.0


@dataclass(frozen=True)
class AggregationConfig:
    """Seuils utilisés par les agrégations.

    Attributes:
        min_commune_count: Nombre minimal de DPE pour publier une commune.
        value_min: Borne basse exclusive des valeurs numériques retenues
                   (consommation, surface).
        value_max: Borne haute exclusive des valeurs numériques retenues.
    """
    min_commune_count: int = 5
    value_min: float = 0.0
    value_max: float = 10000.0


# =============================================================================
# Configuration principale (agrège toutes les sous-configs)
# =============================================================================

@dataclass(frozen=True)
class ProjectConfig:
    """Configuration globale du projet.

    Attributes:
        source: Configuration des sources CSV.
        aggregation: Seuils des statistiques.
        processed_data_dir: Répertoire de sortie du résultat JSON.
        log_level: Niveau de logging global.
    """
    source: SourceConfig = field(default_factory=SourceConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    processed_data_dir: Path = Path("data/processed")
    log_level: str = "INFO"

    @property
    def output_path(self) -> Path:
        """Chemin par défaut du résultat agrégé."""
        return self.processed_data_dir / "dpe_corse_aggregate.json"

    @classmethod
    def from_env(cls) -> ProjectConfig:
        """Construit la configuration à partir des variables d'environnement.

        Utilise les valeurs par défaut si une variable est absente.

        Returns:
            Instance de ProjectConfig complètement initialisée.
        """
        return cls(
            source=SourceConfig(
                data_dir=Path(os.getenv("DPE_DATA_DIR", "data/raw/dpe")),
                base_url=os.getenv("DPE_BASE_URL") or None,
                request_timeout=int(os.getenv("REQUEST_TIMEOUT", "30")),
                max_retries=int(os.getenv("MAX_RETRIES", "3")),
                retry_backoff_factor=float(os.getenv("RETRY_BACKOFF", "1.0")),
            ),
            aggregation=AggregationConfig(
                min_commune_count=int(os.getenv("MIN_COMMUNE_COUNT", "5")),
            ),
            processed_data_dir=Path(os.getenv("PROCESSED_DATA_DIR", "data/processed")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


# =============================================================================
# Instance globale — importable directement
# =============================================================================
# Usage: from config.settings import config
config = ProjectConfig.from_env()
