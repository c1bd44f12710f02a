# -*- coding: utf-8 -*-
"""
Data Collectors Package
========================

Chargement des extraits CSV DPE Corse (disque ou HTTP).

Exemple:
    >>> from src.collectors.dpe_files import DpeFileLoader
    >>> from config.settings import config
    >>> summaries = DpeFileLoader(config).load_all()
"""

from src.collectors.dpe_files import DpeFileLoader, FileLoadResult, LoadStatus

__all__ = ["DpeFileLoader", "FileLoadResult", "LoadStatus"]
