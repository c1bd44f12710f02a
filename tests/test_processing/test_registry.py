# -*- coding: utf-8 -*-
"""Tests pour le registre des fichiers sources."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from src.processing.errors import DpeDataError, UnknownSourceKey
from src.processing.registry import (
    CATEGORIES,
    PERIODS,
    ColumnMap,
    SourceFileSpec,
    all_specs,
    available,
    lookup,
)


class TestLookup:
    """Tests pour lookup() et available()."""

    def test_five_registered_files(self):
        assert available() == [
            "logements_avant_2021",
            "logements_existants_depuis_2021",
            "logements_neufs",
            "tertiaire_avant_2021",
            "tertiaire_depuis_2021",
        ]
        assert len(all_specs()) == 5

    def test_lookup_known_key(self):
        spec = lookup("tertiaire_depuis_2021")
        assert spec.category == "tertiaire"
        assert spec.period == "depuis_2021"
        assert spec.columns.consumption == "conso_kwhep_m2_an"
        assert spec.columns.surface == "surface_utile"

    def test_lookup_unknown_key(self):
        with pytest.raises(UnknownSourceKey) as excinfo:
            lookup("logements_2030")
        assert excinfo.value.key == "logements_2030"
        assert "logements_2030" in str(excinfo.value)

    def test_unknown_key_is_key_error(self):
        with pytest.raises(KeyError):
            lookup("nope")
        with pytest.raises(DpeDataError):
            lookup("nope")

    def test_legacy_schema(self):
        spec = lookup("logements_avant_2021")
        assert spec.columns.dpe_class == "classe_consommation_energie"
        assert spec.columns.commune == "code_insee_commune_actualise"
        assert spec.columns.heating_type is None

    def test_optional_columns(self):
        assert lookup("tertiaire_depuis_2021").columns.building_type is None
        assert lookup("logements_neufs").columns.construction_year is None

    def test_categories_and_periods_covered(self):
        assert {s.category for s in all_specs()} == set(CATEGORIES)
        assert {s.period for s in all_specs()} == set(PERIODS)


class TestSourceFileSpec:
    """Tests pour SourceFileSpec."""

    def test_frozen(self):
        spec = lookup("logements_neufs")
        with pytest.raises(FrozenInstanceError):
            spec.category = "existant"

    def test_invalid_category(self):
        with pytest.raises(ValueError):
            SourceFileSpec(
                key="x", name="x", short_name="x", category="industrie",
                period="avant_2021", filename="x.csv",
                columns=ColumnMap("a", "b", "c", "d", "e", "f"),
            )
