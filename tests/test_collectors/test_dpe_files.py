# -*- coding: utf-8 -*-
"""Tests pour le chargeur des extraits DPE (DpeFileLoader)."""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import MagicMock, PropertyMock, patch

import pytest
import requests

from src.collectors.dpe_files import DpeFileLoader, LoadStatus
from src.processing.errors import NoUsableDataError
from src.processing.registry import lookup


def _write(config, key, text):
    spec = lookup(key)
    path = config.source.data_dir / spec.filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLocalFiles:
    """Chargement depuis le disque."""

    def test_load_single_file(self, test_config, sample_neufs_csv):
        _write(test_config, "logements_neufs", sample_neufs_csv)
        loader = DpeFileLoader(test_config)

        result = loader.load_file("logements_neufs")

        assert result.status == LoadStatus.SUCCESS
        assert result.summary.total_count == 10
        assert result.rows_loaded == 10
        assert result.location.endswith("DPE Logements neufs (depuis juillet 2021).csv")
        assert result.duration_seconds is not None

    def test_missing_file_is_failed_result(self, test_config):
        result = DpeFileLoader(test_config).load_file("logements_neufs")
        assert result.status == LoadStatus.FAILED
        assert result.summary is None
        assert result.errors

    def test_unknown_key_is_failed_result(self, test_config):
        result = DpeFileLoader(test_config).load_file("logements_2030")
        assert result.status == LoadStatus.FAILED
        assert "logements_2030" in result.errors[0]

    def test_partial_load_continues(self, test_config, sample_neufs_csv, make_csv):
        _write(test_config, "logements_neufs", sample_neufs_csv)
        _write(test_config, "tertiaire_depuis_2021", make_csv([{"etiquette_dpe": "G"}]))
        _write(test_config, "logements_avant_2021", 'classe_consommation_energie\n"A\n')

        loader = DpeFileLoader(test_config)
        summaries = loader.load_all()

        assert [s.key for s in summaries] == ["logements_neufs", "tertiaire_depuis_2021"]
        statuses = {r.key: r.status for r in loader.results}
        assert statuses["logements_avant_2021"] == LoadStatus.FAILED
        assert statuses["logements_existants_depuis_2021"] == LoadStatus.FAILED
        assert len(loader.results) == 5

    def test_no_file_raises(self, test_config):
        loader = DpeFileLoader(test_config)
        with pytest.raises(NoUsableDataError) as excinfo:
            loader.load_all()
        assert len(excinfo.value.errors) == 5

    def test_selected_keys_only(self, test_config, sample_neufs_csv):
        _write(test_config, "logements_neufs", sample_neufs_csv)
        loader = DpeFileLoader(test_config)
        summaries = loader.load_all(["logements_neufs"])
        assert len(summaries) == 1
        assert len(loader.results) == 1

    def test_progress_callback(self, test_config, sample_neufs_csv):
        _write(test_config, "logements_neufs", sample_neufs_csv)
        progress = MagicMock()
        DpeFileLoader(test_config).load_all(progress=progress)
        # logements_neufs est le 3e fichier du registre
        progress.assert_called_once_with(3, 5)

    def test_load_and_aggregate(self, test_config, sample_neufs_csv, make_csv):
        _write(test_config, "logements_neufs", sample_neufs_csv)
        _write(test_config, "logements_avant_2021", make_csv(
            [{"classe_consommation_energie": "E"}] * 4
        ))
        result = DpeFileLoader(test_config).load_and_aggregate()

        assert result.total_dpe == 14
        assert result.by_category["existant"].count == 4
        assert result.by_category["neuf"].count == 10
        assert result.by_period["avant_2021"].count == 4


class TestHttpFiles:
    """Chargement depuis une URL de base."""

    @pytest.fixture
    def http_config(self, test_config):
        return replace(
            test_config,
            source=replace(test_config.source, base_url="https://example.org/data"),
        )

    def test_location_is_quoted_url(self, http_config):
        url = DpeFileLoader(http_config).location(lookup("logements_neufs"))
        assert url.startswith("https://example.org/data/DPE%20Logements%20neufs")
        assert url.endswith(".csv")

    @patch.object(DpeFileLoader, "session", new_callable=PropertyMock)
    def test_fetch_success(self, mock_session, http_config, sample_neufs_csv):
        response = MagicMock()
        response.text = sample_neufs_csv
        response.encoding = "utf-8"
        mock_session.return_value.get.return_value = response

        result = DpeFileLoader(http_config).load_file("logements_neufs")

        assert result.status == LoadStatus.SUCCESS
        assert result.summary.total_count == 10
        response.raise_for_status.assert_called_once()
        _, kwargs = mock_session.return_value.get.call_args
        assert kwargs["timeout"] == 5

    @patch.object(DpeFileLoader, "session", new_callable=PropertyMock)
    def test_http_error_skips_file(self, mock_session, http_config):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        mock_session.return_value.get.return_value = response

        result = DpeFileLoader(http_config).load_file("logements_neufs")

        assert result.status == LoadStatus.FAILED
        assert "404" in result.errors[0]

    def test_session_has_retry_adapter(self, http_config):
        session = DpeFileLoader(http_config).session
        adapter = session.get_adapter("https://example.org/")
        assert adapter.max_retries.total == 1
        assert 503 in adapter.max_retries.status_forcelist


class TestFileLoadResult:
    """Tests pour l'affichage du bilan."""

    def test_str(self, test_config, sample_neufs_csv):
        _write(test_config, "logements_neufs", sample_neufs_csv)
        result = DpeFileLoader(test_config).load_file("logements_neufs")
        text = str(result)
        assert "SUCCESS" in text
        assert "logements_neufs" in text


class TestLoaderLifecycle:
    """Fermeture de la session HTTP."""

    def test_close_releases_session(self, test_config):
        loader = DpeFileLoader(test_config)
        session = loader.session
        with patch.object(session, "close") as mock_close:
            loader.close()
        mock_close.assert_called_once()
        assert loader.session is not session

    def test_close_without_session(self, test_config):
        loader = DpeFileLoader(test_config)
        loader.close()
        assert loader._session is None

    def test_context_manager_closes(self, test_config):
        with patch.object(DpeFileLoader, "close") as mock_close:
            with DpeFileLoader(test_config) as loader:
                assert isinstance(loader, DpeFileLoader)
        mock_close.assert_called_once()

    def test_context_manager_closes_on_error(self, test_config):
        with patch.object(DpeFileLoader, "close") as mock_close:
            with pytest.raises(NoUsableDataError):
                with DpeFileLoader(test_config) as loader:
                    loader.load_all()
        mock_close.assert_called_once()
