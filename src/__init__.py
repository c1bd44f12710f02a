# -*- coding: utf-8 -*-
"""
DPE Corse — Source Package
==========================

Agrégation des diagnostics de performance énergétique (DPE) des
bâtiments de Corse : distributions par classe, statistiques par
commune, ventilations par catégorie et par période.

Modules:
    collectors  — Chargement des extraits CSV (disque ou HTTP)
    processing  — Registre des schémas, normalisation, agrégations
    data        — Résultat précalculé de secours
    pipeline    — Point d'entrée CLI
"""
