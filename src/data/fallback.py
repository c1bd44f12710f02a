# -*- coding: utf-8 -*-
"""
Résultat agrégé précalculé — jeu de secours.
============================================

Résultat figé calculé à partir de 70 590 DPE géolocalisés en Corse.
Il est servi à la couche de présentation quand les extraits CSV ne
sont pas disponibles.

Sa forme diffère de `AggregateResult.to_dict()` :
    - `byCategory` / `byPeriod` : `distribution` est ici une liste
      `[{class, count, percentage}]`, contre un compteur `{A: n, ..., G: n}`
      dans le résultat calculé ; les entrées portent aussi un `name`
      (et des moyennes pour `byCategory`) ;
    - `topCommunes` et `yearlyEvolution` remplacent `communeStats` et
      les distributions annuelles par fichier.

Usage:
    >>> from src.data.fallback import load_fallback
    >>> data = load_fallback()
    >>> data["totalDPE"]
    70590
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List


def _distribution(*rows: tuple) -> List[Dict[str, Any]]:
    return [
        {"class": dpe_class, "count": count, "percentage": percentage}
        for dpe_class, count, percentage in rows
    ]


FALLBACK_DATASET: Dict[str, Any] = {
    "totalDPE": 70590,
    "globalDistribution": _distribution(
        ("A", 11086, "15.7"),
        ("B", 7121, "10.1"),
        ("C", 26418, "37.4"),
        ("D", 15238, "21.6"),
        ("E", 6510, "9.2"),
        ("F", 2568, "3.6"),
        ("G", 1649, "2.3"),
    ),
    "byCategory": {
        "existant": {
            "name": "Logements existants",
            "count": 63999,
            "avgConsumption": 172,
            "avgSurface": 84,
            "passoirePercentage": 6.1,
            "classAPercentage": 10.8,
            "distribution": _distribution(
                ("A", 6942, "10.8"),
                ("B", 6240, "9.8"),
                ("C", 25672, "40.1"),
                ("D", 14918, "23.3"),
                ("E", 6345, "9.9"),
                ("F", 2463, "3.8"),
                ("G", 1419, "2.2"),
            ),
        },
        "neuf": {
            "name": "Logements neufs",
            "count": 5038,
            "avgConsumption": 48,
            "avgSurface": 83,
            "passoirePercentage": 0.04,
            "classAPercentage": 80.0,
            "distribution": _distribution(
                ("A", 4032, "80.0"),
                ("B", 649, "12.9"),
                ("C", 354, "7.0"),
                ("D", 1, "0.0"),
                ("E", 0, "0.0"),
                ("F", 1, "0.0"),
                ("G", 1, "0.0"),
            ),
        },
        "tertiaire": {
            "name": "Tertiaire",
            "count": 1553,
            "avgConsumption": 382,
            "avgSurface": 240,
            "passoirePercentage": 21.4,
            "classAPercentage": 7.2,
            "distribution": _distribution(
                ("A", 112, "7.2"),
                ("B", 232, "14.9"),
                ("C", 392, "25.2"),
                ("D", 319, "20.5"),
                ("E", 165, "10.6"),
                ("F", 104, "6.7"),
                ("G", 229, "14.7"),
            ),
        },
    },
    "byPeriod": {
        "avant_2021": {
            "name": "Avant juillet 2021",
            "count": 17306,
            "distribution": _distribution(
                ("A", 2667, "15.4"),
                ("B", 1740, "10.1"),
                ("C", 4578, "26.5"),
                ("D", 5093, "29.4"),
                ("E", 2219, "12.8"),
                ("F", 746, "4.3"),
                ("G", 263, "1.5"),
            ),
        },
        "depuis_2021": {
            "name": "Depuis juillet 2021",
            "count": 53284,
            "distribution": _distribution(
                ("A", 8419, "15.8"),
                ("B", 5381, "10.1"),
                ("C", 21840, "41.0"),
                ("D", 10145, "19.0"),
                ("E", 4291, "8.1"),
                ("F", 1822, "3.4"),
                ("G", 1386, "2.6"),
            ),
        },
    },
    "topCommunes": [
        {"name": "Ajaccio", "count": 18356, "avgScore": 4.8, "avgConsumption": 165},
        {"name": "Bastia", "count": 9376, "avgScore": 4.6, "avgConsumption": 178},
        {"name": "Porto-Vecchio", "count": 4182, "avgScore": 4.9, "avgConsumption": 142},
        {"name": "Biguglia", "count": 2160, "avgScore": 5.1, "avgConsumption": 135},
        {"name": "Calvi", "count": 1856, "avgScore": 4.7, "avgConsumption": 158},
        {"name": "Furiani", "count": 1679, "avgScore": 5.0, "avgConsumption": 148},
        {"name": "Corte", "count": 1582, "avgScore": 4.4, "avgConsumption": 195},
        {"name": "Grosseto-Prugna", "count": 1570, "avgScore": 5.2, "avgConsumption": 130},
        {"name": "Lucciana", "count": 1423, "avgScore": 5.0, "avgConsumption": 145},
        {"name": "Borgo", "count": 1365, "avgScore": 5.1, "avgConsumption": 140},
    ],
    "yearlyEvolution": [
        {"year": "2013", "A": 320, "B": 280, "C": 850, "D": 1180, "E": 520, "F": 240, "G": 80},
        {"year": "2014", "A": 380, "B": 320, "C": 980, "D": 1320, "E": 590, "F": 280, "G": 110},
        {"year": "2015", "A": 440, "B": 370, "C": 1120, "D": 1450, "E": 650, "F": 300, "G": 120},
        {"year": "2016", "A": 510, "B": 420, "C": 1280, "D": 1580, "E": 720, "F": 320, "G": 140},
        {"year": "2017", "A": 580, "B": 480, "C": 1450, "D": 1720, "E": 800, "F": 350, "G": 150},
        {"year": "2018", "A": 650, "B": 540, "C": 1620, "D": 1880, "E": 880, "F": 380, "G": 160},
        {"year": "2019", "A": 720, "B": 600, "C": 1780, "D": 2020, "E": 950, "F": 400, "G": 180},
        {"year": "2020", "A": 780, "B": 650, "C": 1950, "D": 2180, "E": 1020, "F": 420, "G": 190},
        {"year": "2021", "A": 2650, "B": 1320, "C": 5480, "D": 3050, "E": 1380, "F": 520, "G": 350},
        {"year": "2022", "A": 3320, "B": 1680, "C": 7050, "D": 3650, "E": 1520, "F": 580, "G": 420},
        {"year": "2023", "A": 3780, "B": 1950, "C": 8220, "D": 3920, "E": 1650, "F": 620, "G": 480},
        {"year": "2024", "A": 1956, "B": 1011, "C": 4038, "D": 2088, "E": 830, "F": 358, "G": 269},
    ],
}


def load_fallback() -> Dict[str, Any]:
    """Copie indépendante du jeu de secours (modifiable sans effet de bord)."""
    return copy.deepcopy(FALLBACK_DATASET)
