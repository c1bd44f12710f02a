# -*- coding: utf-8 -*-
"""
Registre des fichiers sources DPE.
==================================

Les cinq extraits ADEME couvrant la Corse n'ont pas le même schéma :
les DPE antérieurs à juillet 2021 (ancienne méthode) et les DPE v2
utilisent des noms de colonnes différents. Chaque fichier est donc
décrit par un `SourceFileSpec` qui associe des champs logiques
(dpe_class, consumption, commune...) aux colonnes physiques du CSV.

Le registre est figé : il est défini une fois à l'import et n'est
jamais modifié.

Usage:
    >>> from src.processing.registry import lookup, available
    >>> available()
    ['logements_avant_2021', 'logements_existants_depuis_2021', ...]
    >>> lookup("logements_neufs").category
    'neuf'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.processing.errors import UnknownSourceKey

CATEGORIES: Tuple[str, ...] = ("existant", "neuf", "tertiaire")
PERIODS: Tuple[str, ...] = ("avant_2021", "depuis_2021")


@dataclass(frozen=True)
class ColumnMap:
    """Champs logiques → colonnes physiques d'un extrait CSV.

    Les quatre derniers champs sont optionnels : None signifie que le
    fichier ne fournit pas l'information.
    """
    dpe_class: str
    ges_class: str
    consumption: str
    surface: str
    commune: str
    department: str
    construction_year: Optional[str] = None
    building_type: Optional[str] = None
    established_date: Optional[str] = None
    heating_type: Optional[str] = None


@dataclass(frozen=True)
class SourceFileSpec:
    """Description d'un fichier source.

    Attributes:
        key: Identifiant unique du fichier.
        name: Libellé long (affichage).
        short_name: Libellé court (légendes).
        category: "existant", "neuf" ou "tertiaire".
        period: "avant_2021" ou "depuis_2021".
        filename: Nom du fichier CSV (disque ou URL).
        columns: Correspondance champs logiques → colonnes.
    """
    key: str
    name: str
    short_name: str
    category: str
    period: str
    filename: str
    columns: ColumnMap

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"Catégorie inconnue : '{self.category}'")
        if self.period not in PERIODS:
            raise ValueError(f"Période inconnue : '{self.period}'")


# Ancienne méthode (avant juillet 2021) : colonnes "classe_*", "tv016_*", "tr002_*"
_LEGACY_DWELLING_COLUMNS = ColumnMap(
    dpe_class="classe_consommation_energie",
    ges_class="classe_estimation_ges",
    consumption="consommation_energie",
    surface="surface_thermique_lot",
    commune="code_insee_commune_actualise",
    department="tv016_departement_code",
    construction_year="annee_construction",
    building_type="tr002_type_batiment_description",
    established_date="date_etablissement_dpe",
)

# DPE v2 (depuis juillet 2021) : colonnes "etiquette_*", "*_ban"
_V2_DWELLING_COLUMNS = ColumnMap(
    dpe_class="etiquette_dpe",
    ges_class="etiquette_ges",
    consumption="conso_5_usages_par_m2_ep",
    surface="surface_habitable_logement",
    commune="nom_commune_ban",
    department="code_departement_ban",
    construction_year="annee_construction",
    building_type="type_batiment",
    established_date="date_etablissement_dpe",
    heating_type="type_energie_principale_chauffage",
)

SOURCE_FILES: Dict[str, SourceFileSpec] = {
    spec.key: spec
    for spec in (
        SourceFileSpec(
            key="logements_avant_2021",
            name="Logements (avant juillet 2021)",
            short_name="Logements avant 2021",
            category="existant",
            period="avant_2021",
            filename="DPE Logements (avant juillet 2021).csv",
            columns=_LEGACY_DWELLING_COLUMNS,
        ),
        SourceFileSpec(
            key="logements_existants_depuis_2021",
            name="Logements existants (depuis juillet 2021)",
            short_name="Logements existants",
            category="existant",
            period="depuis_2021",
            filename="DPE Logements existants (depuis juillet 2021).csv",
            columns=_V2_DWELLING_COLUMNS,
        ),
        SourceFileSpec(
            key="logements_neufs",
            name="Logements neufs (depuis juillet 2021)",
            short_name="Logements neufs",
            category="neuf",
            period="depuis_2021",
            filename="DPE Logements neufs (depuis juillet 2021).csv",
            # Pas d'année de construction pour le neuf
            columns=ColumnMap(
                dpe_class="etiquette_dpe",
                ges_class="etiquette_ges",
                consumption="conso_5_usages_par_m2_ep",
                surface="surface_habitable_logement",
                commune="nom_commune_ban",
                department="code_departement_ban",
                building_type="type_batiment",
                established_date="date_etablissement_dpe",
                heating_type="type_energie_principale_chauffage",
            ),
        ),
        SourceFileSpec(
            key="tertiaire_avant_2021",
            name="Tertiaire (avant juillet 2021)",
            short_name="Tertiaire avant 2021",
            category="tertiaire",
            period="avant_2021",
            filename="DPE tertiaire (avant juillet 2021).csv",
            columns=ColumnMap(
                dpe_class="classe_consommation_energie",
                ges_class="classe_estimation_ges",
                consumption="consommation_energie",
                surface="surface_habitable",
                commune="commune",
                department="tv016_departement_code",
                construction_year="annee_construction",
                building_type="tr002_type_batiment_description",
                established_date="date_etablissement_dpe",
            ),
        ),
        SourceFileSpec(
            key="tertiaire_depuis_2021",
            name="Tertiaire (depuis juillet 2021)",
            short_name="Tertiaire depuis 2021",
            category="tertiaire",
            period="depuis_2021",
            filename="DPE tertiaire (depuis juillet 2021).csv",
            # Pas de type de bâtiment dans l'extrait tertiaire v2
            columns=ColumnMap(
                dpe_class="etiquette_dpe",
                ges_class="etiquette_ges",
                consumption="conso_kwhep_m2_an",
                surface="surface_utile",
                commune="nom_commune_ban",
                department="code_departement_ban",
                construction_year="annee_construction",
                established_date="date_etablissement_dpe",
                heating_type="type_energie_principale_chauffage",
            ),
        ),
    )
}


def available() -> List[str]:
    """Liste les clés du registre, dans l'ordre de déclaration."""
    return list(SOURCE_FILES)


def all_specs() -> List[SourceFileSpec]:
    """Liste les descriptions de fichiers, dans l'ordre de déclaration."""
    return list(SOURCE_FILES.values())


def lookup(key: str) -> SourceFileSpec:
    """Retourne la description d'un fichier source.

    Args:
        key: Identifiant du fichier (ex: "logements_neufs").

    Returns:
        Le SourceFileSpec correspondant.

    Raises:
        UnknownSourceKey: Si la clé n'est pas enregistrée.
    """
    try:
        return SOURCE_FILES[key]
    except KeyError:
        raise UnknownSourceKey(key, available()) from None
