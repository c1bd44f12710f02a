# -*- coding: utf-8 -*-
"""
Chargeur des extraits DPE Corse — lecture disque ou HTTP.
=========================================================

Récupère le texte des cinq extraits CSV décrits dans le registre,
puis enchaîne pour chacun : parse → résumé par fichier. Le chargement
est « best-effort » :

    - un fichier manquant, une erreur HTTP ou un CSV mal formé est
      logué puis ignoré, le chargement continue avec les suivants ;
    - si AUCUN fichier n'a pu être chargé, NoUsableDataError est levée
      et aucun résultat n'est produit (l'appelant peut relancer tout
      le chargement depuis le début).

Les fichiers sont lus sous `config.source.data_dir`, ou téléchargés
depuis `config.source.base_url` + nom de fichier si l'URL est renseignée.

Architecture :
    DpeFileLoader
    ├── read_text()          → Texte brut d'un fichier (disque ou HTTP)
    ├── load_file()          → FileLoadResult (résumé ou erreur)
    ├── load_all()           → FileSummary[] (barrière : tous les fichiers)
    └── load_and_aggregate() → AggregateResult

Usage:
    >>> from config.settings import config
    >>> with DpeFileLoader(config) as loader:
    ...     result = loader.load_and_aggregate()
    >>> print(result.total_dpe)
    >>> for r in loader.results:
    ...     print(r)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from urllib.parse import quote, urljoin

import requests
from requests.adapters import HTTPAdapter
from tqdm import tqdm
from urllib3.util.retry import Retry

from config.settings import ProjectConfig
from src.processing.cross_aggregator import CrossFileAggregator
from src.processing.errors import NoUsableDataError
from src.processing.file_aggregator import FileAggregator
from src.processing.models import AggregateResult, FileSummary
from src.processing.normalizer import parse
from src.processing.registry import SourceFileSpec, available, lookup

# Callback de progression : (fichiers traités, fichiers attendus)
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Résultat du chargement d'un fichier
# =============================================================================

class LoadStatus(Enum):
    """États possibles du chargement d'un fichier.

    Values:
        SUCCESS: Fichier lu, parsé et résumé.
        FAILED: Fichier ignoré (absent, HTTP, CSV mal formé...).
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class FileLoadResult:
    """Bilan du chargement d'un fichier.

    Attributes:
        key: Clé du fichier dans le registre.
        status: Statut final.
        location: Chemin ou URL lu.
        summary: Résumé du fichier (None en cas d'échec).
        started_at: Horodatage de début.
        finished_at: Horodatage de fin.
        errors: Messages d'erreur rencontrés.
    """
    key: str
    status: LoadStatus
    location: Optional[str] = None
    summary: Optional[FileSummary] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    errors: List[str] = field(default_factory=list)

    @property
    def rows_loaded(self) -> int:
        return self.summary.total_count if self.summary else 0

    @property
    def duration_seconds(self) -> Optional[float]:
        """Durée du chargement en secondes."""
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return None

    def __str__(self) -> str:
        """Résumé lisible du résultat."""
        duration = f"{self.duration_seconds:.1f}s" if self.duration_seconds else "N/A"
        return (
            f"[{self.status.value.upper():>7}] {self.key:<32} "
            f"| {self.rows_loaded:>6} lignes | {duration}"
        )


# =============================================================================
# Chargeur
# =============================================================================

class DpeFileLoader:
    """Charge et résume les extraits DPE du registre.

    Attributes:
        config: Configuration du projet (source, seuils).
        logger: Logger structuré.
        results: Bilan du dernier chargement, un FileLoadResult par fichier.
    """

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.logger = logging.getLogger("collectors.dpe_files")
        self.results: List[FileLoadResult] = []
        self._aggregator = FileAggregator(config.aggregation)
        self._session: Optional[requests.Session] = None

    def close(self) -> None:
        """Ferme la session HTTP si elle a été ouverte."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> DpeFileLoader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Lecture du texte brut ---------------------------------------------

    @property
    def session(self) -> requests.Session:
        """Session HTTP avec retry automatique (lazy-initialisée).

        Retries sur 429, 500, 502, 503, 504 avec backoff exponentiel.
        """
        if self._session is None:
            self._session = requests.Session()
            retry_strategy = Retry(
                total=self.config.source.max_retries,
                backoff_factor=self.config.source.retry_backoff_factor,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET", "HEAD"],
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self._session.mount("https://", adapter)
            self._session.mount("http://", adapter)
        return self._session

    def location(self, spec: SourceFileSpec) -> str:
        """Chemin local ou URL du fichier."""
        if self.config.source.base_url:
            base = self.config.source.base_url.rstrip("/") + "/"
            return urljoin(base, quote(spec.filename))
        return str(Path(self.config.source.data_dir) / spec.filename)

    def read_text(self, spec: SourceFileSpec) -> str:
        """Lit le texte brut d'un fichier.

        Args:
            spec: Description du fichier.

        Returns:
            Contenu texte complet du CSV.

        Raises:
            requests.HTTPError: Sur code 4xx/5xx après retries.
            FileNotFoundError: Si le fichier local est absent.
        """
        location = self.location(spec)
        if self.config.source.base_url:
            self.logger.debug("GET %s", location)
            response = self.session.get(
                location, timeout=self.config.source.request_timeout,
            )
            response.raise_for_status()
            if not response.encoding or response.encoding.lower() == "iso-8859-1":
                response.encoding = "utf-8"
            return response.text
        return Path(location).read_text(encoding="utf-8")

    # --- Chargement --------------------------------------------------------

    def load_file(self, key: str) -> FileLoadResult:
        """Charge et résume un fichier.

        Le chargement ne s'interrompt jamais brutalement : toute erreur
        est consignée dans le résultat (statut FAILED).

        Args:
            key: Clé du fichier dans le registre.

        Returns:
            FileLoadResult avec le résumé ou les erreurs.
        """
        result = FileLoadResult(
            key=key, status=LoadStatus.FAILED, started_at=datetime.now(),
        )
        try:
            spec = lookup(key)
            result.location = self.location(spec)
            rows = parse(self.read_text(spec), spec)
            result.summary = self._aggregator.summarize(rows, spec)
            result.status = LoadStatus.SUCCESS
        except Exception as exc:
            self.logger.warning("✗ Fichier '%s' ignoré : %s", key, exc)
            self.logger.debug("Détail de l'erreur '%s'", key, exc_info=True)
            result.errors.append(str(exc))

        result.finished_at = datetime.now()
        return result

    def load_all(
        self,
        keys: Optional[Sequence[str]] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> List[FileSummary]:
        """Charge tous les fichiers demandés, en séquence.

        Args:
            keys: Clés à charger (défaut : tout le registre, dans l'ordre).
            progress: Appelé après chaque fichier chargé avec
                      (position du fichier, nombre de fichiers).

        Returns:
            Résumés des fichiers chargés avec succès.

        Raises:
            NoUsableDataError: Si aucun fichier n'a pu être chargé.
        """
        keys = list(keys) if keys else available()
        self.results = []
        summaries: List[FileSummary] = []

        self.logger.info("Chargement de %d fichiers DPE : %s", len(keys), keys)

        for position, key in enumerate(tqdm(keys, desc="  Fichiers DPE", leave=False), 1):
            result = self.load_file(key)
            self.results.append(result)
            if result.summary is not None:
                summaries.append(result.summary)
                if progress is not None:
                    progress(position, len(keys))

        if not summaries:
            errors = [e for r in self.results for e in r.errors]
            self.logger.error("Aucun fichier DPE chargé. Erreurs : %s", errors)
            raise NoUsableDataError(errors)

        if len(summaries) < len(keys):
            self.logger.warning(
                "⚠ Chargement partiel : %d/%d fichiers", len(summaries), len(keys),
            )
        for result in self.results:
            self.logger.info("  %s", result)

        return summaries

    def load_and_aggregate(
        self,
        keys: Optional[Sequence[str]] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> AggregateResult:
        """Charge tous les fichiers puis calcule le résultat global."""
        summaries = self.load_all(keys, progress=progress)
        return CrossFileAggregator().aggregate(summaries)
