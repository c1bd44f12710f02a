# -*- coding: utf-8 -*-
"""Tests pour les structures de sortie et la forme JSON."""

from __future__ import annotations

import json

import pytest

from src.processing.dpe_classes import DPEClass
from src.processing.models import (
    CommuneStat,
    build_distribution,
    empty_counts,
    format_percentage,
)


class TestFormatPercentage:
    """Tests pour format_percentage()."""

    @pytest.mark.parametrize("count,total,expected", [
        (2, 3, "66.7"),
        (1, 3, "33.3"),
        (3, 3, "100.0"),
        (0, 3, "0.0"),
        (1, 8, "12.5"),
        (1, 16, "6.3"),      # 6.25 exact : arrondi au demi supérieur
        (1, 0, "0"),
    ])
    def test_values(self, count, total, expected):
        assert format_percentage(count, total) == expected


class TestDistribution:
    """Tests pour build_distribution()."""

    def test_seven_entries(self):
        counts = empty_counts()
        counts[DPEClass.C] = 5
        entries = build_distribution(counts)
        assert len(entries) == 7
        assert entries[2].to_dict() == {"class": "C", "count": 5, "percentage": "100.0"}

    def test_empty_counts(self):
        entries = build_distribution(empty_counts())
        assert [e.percentage for e in entries] == ["0"] * 7


class TestJsonShape:
    """La forme JSON suit les noms de champs attendus par la présentation."""

    def test_file_summary_keys(self, make_summary):
        payload = make_summary("logements_neufs", {"A": 1}).to_dict()
        assert list(payload) == [
            "key", "name", "shortName", "category", "period", "totalCount",
            "dpeDistribution", "avgConsumption", "avgSurface",
            "passoirePercentage", "classAPercentage", "communeStats",
            "buildingTypes", "yearlyDistribution",
        ]

    def test_commune_stat_keys(self):
        assert CommuneStat("BASTIA", 5, 4.2, None).to_dict() == {
            "name": "BASTIA", "count": 5, "avgScore": 4.2, "avgConsumption": None,
        }

    def test_json_serializable(self, make_summary):
        from src.processing.cross_aggregator import aggregate

        result = aggregate([make_summary("logements_neufs", {"A": 1, "F": 1})])
        payload = json.loads(json.dumps(result.to_dict()))
        assert list(payload) == [
            "totalDPE", "globalDistribution", "byCategory", "byPeriod",
            "communeStats", "files",
        ]
        assert payload["globalDistribution"][5] == {
            "class": "F", "count": 1, "percentage": "50.0",
        }
