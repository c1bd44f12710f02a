# -*- coding: utf-8 -*-
"""Shared fixtures for the DPE Corse tests."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pandas as pd
import pytest

from config.settings import AggregationConfig, ProjectConfig, SourceConfig
from src.processing.dpe_classes import DPEClass
from src.processing.models import FileSummary, build_distribution, empty_counts
from src.processing.registry import SourceFileSpec, lookup


@pytest.fixture
def test_config(tmp_path) -> ProjectConfig:
    """Test configuration with temporary paths."""
    return ProjectConfig(
        source=SourceConfig(
            data_dir=tmp_path / "raw",
            request_timeout=5,
            max_retries=1,
            retry_backoff_factor=0.1,
        ),
        aggregation=AggregationConfig(),
        processed_data_dir=tmp_path / "processed",
    )


@pytest.fixture
def neufs_spec() -> SourceFileSpec:
    return lookup("logements_neufs")


@pytest.fixture
def legacy_spec() -> SourceFileSpec:
    return lookup("logements_avant_2021")


@pytest.fixture
def make_csv() -> Callable[[List[Dict[str, str]]], str]:
    """Build CSV text (header + rows) from a list of dicts."""
    def _make(rows: List[Dict[str, str]], columns: Optional[List[str]] = None) -> str:
        return pd.DataFrame(rows, columns=columns).to_csv(index=False)
    return _make


@pytest.fixture
def sample_neufs_rows() -> List[Dict[str, str]]:
    """Ten DPE v2 rows: 6 in Ajaccio, 3 in Bastia, 1 invalid class."""
    return [
        {"etiquette_dpe": "A", "nom_commune_ban": "Ajaccio", "conso_5_usages_par_m2_ep": "40",
         "surface_habitable_logement": "80", "type_batiment": "maison",
         "date_etablissement_dpe": "2022-03-01"},
        {"etiquette_dpe": "a", "nom_commune_ban": " ajaccio ", "conso_5_usages_par_m2_ep": "60",
         "surface_habitable_logement": "70", "type_batiment": "appartement",
         "date_etablissement_dpe": "2022-06-15"},
        {"etiquette_dpe": "B", "nom_commune_ban": "AJACCIO", "conso_5_usages_par_m2_ep": "90",
         "surface_habitable_logement": "100", "type_batiment": "Appartement",
         "date_etablissement_dpe": "2023-01-10"},
        {"etiquette_dpe": "C", "nom_commune_ban": "Ajaccio", "conso_5_usages_par_m2_ep": "n/a",
         "surface_habitable_logement": "", "type_batiment": "immeuble",
         "date_etablissement_dpe": "2023-02-02"},
        {"etiquette_dpe": "F", "nom_commune_ban": "Ajaccio", "conso_5_usages_par_m2_ep": "350",
         "surface_habitable_logement": "55", "type_batiment": "",
         "date_etablissement_dpe": "2021-09-30"},
        {"etiquette_dpe": "X", "nom_commune_ban": "Ajaccio", "conso_5_usages_par_m2_ep": "20000",
         "surface_habitable_logement": "60", "type_batiment": "maison",
         "date_etablissement_dpe": "2022-12-31"},
        {"etiquette_dpe": "G", "nom_commune_ban": "Bastia", "conso_5_usages_par_m2_ep": "450",
         "surface_habitable_logement": "45", "type_batiment": "logement collectif",
         "date_etablissement_dpe": ""},
        {"etiquette_dpe": "D", "nom_commune_ban": "Bastia", "conso_5_usages_par_m2_ep": "200",
         "surface_habitable_logement": "65", "type_batiment": "maison",
         "date_etablissement_dpe": "2023-05-05"},
        {"etiquette_dpe": "C", "nom_commune_ban": "Bastia", "conso_5_usages_par_m2_ep": "150",
         "surface_habitable_logement": "75", "type_batiment": "appartement",
         "date_etablissement_dpe": "2023-07-07"},
        {"etiquette_dpe": "B", "nom_commune_ban": "", "conso_5_usages_par_m2_ep": "0",
         "surface_habitable_logement": "90", "type_batiment": "maison",
         "date_etablissement_dpe": "2022-08-08"},
    ]


@pytest.fixture
def sample_neufs_csv(make_csv, sample_neufs_rows) -> str:
    return make_csv(sample_neufs_rows)


@pytest.fixture
def make_summary() -> Callable[..., FileSummary]:
    """Build a minimal FileSummary from per-class counts."""
    def _make(
        key: str = "logements_neufs",
        counts: Optional[Dict[str, int]] = None,
        total_count: Optional[int] = None,
        commune_stats=(),
    ) -> FileSummary:
        spec = lookup(key)
        class_counts = empty_counts()
        for letter, count in (counts or {}).items():
            class_counts[DPEClass(letter)] = count
        valid = sum(class_counts.values())
        return FileSummary(
            key=spec.key,
            name=spec.name,
            short_name=spec.short_name,
            category=spec.category,
            period=spec.period,
            total_count=valid if total_count is None else total_count,
            dpe_distribution=build_distribution(class_counts),
            avg_consumption=None,
            avg_surface=None,
            passoire_percentage=0.0,
            class_a_percentage=0.0,
            commune_stats=tuple(commune_stats),
        )
    return _make

