"""
Tests for reading the static restaurant document from disk and HTTP.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from restaurant_directory.data.source import (
    fetch_document,
    load_raw_collection,
    read_document,
    unwrap_document,
)
from restaurant_directory.exceptions import DataLoadError, DataSourceError


class TestUnwrap:
    """Tests for unwrap_document()."""

    def test_plain_array(self):
        assert unwrap_document([{"name": "A"}]) == [{"name": "A"}]

    def test_wrapped_array(self):
        assert unwrap_document({"restaurants": [{"name": "A"}]}) == [{"name": "A"}]

    def test_other_objects_untouched(self):
        """Unknown shapes pass through so the store can reject them."""
        assert unwrap_document({"items": []}) == {"items": []}


class TestReadDocument:
    """Tests for file sources."""

    def test_reads_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps([{"name": "A"}]), encoding="utf-8")
        assert read_document(path) == [{"name": "A"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceError):
            read_document(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(DataSourceError) as exc_info:
            read_document(path)
        assert exc_info.value.details["source"] == str(path)

    def test_not_utf8(self, tmp_path):
        """Undecodable bytes are a source error, not a UnicodeDecodeError."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"name": "Caf\xe9"}]')
        with pytest.raises(DataSourceError) as exc_info:
            read_document(path)
        assert exc_info.value.details["source"] == str(path)

    def test_bundled_dataset_loads(self):
        """The dataset shipped in data/ parses and unwraps to a list."""
        from pathlib import Path

        bundled = Path(__file__).resolve().parent.parent / "data" / "restaurants.json"
        records = unwrap_document(read_document(bundled))
        assert isinstance(records, list)
        assert len(records) == 10


class TestFetchDocument:
    """Tests for HTTP sources (requests is mocked)."""

    def test_fetch_json(self):
        response = MagicMock()
        response.json.return_value = {"restaurants": []}
        session = MagicMock()
        session.get.return_value = response

        assert fetch_document("https://example.com/r.json", timeout=3, session=session) == {"restaurants": []}
        session.get.assert_called_once_with("https://example.com/r.json", timeout=3)

    def test_http_error(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        session = MagicMock()
        session.get.return_value = response

        with pytest.raises(DataSourceError):
            fetch_document("https://example.com/r.json", session=session)

    def test_connection_error_is_a_load_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(DataLoadError):
            fetch_document("https://example.com/r.json", session=session)

    def test_bad_json_body(self):
        response = MagicMock()
        response.json.side_effect = ValueError("Expecting value")
        session = MagicMock()
        session.get.return_value = response
        with pytest.raises(DataSourceError):
            fetch_document("https://example.com/r.json", session=session)


class TestLoadRawCollection:
    """Tests for source dispatch."""

    def test_url_goes_over_http(self):
        with patch("restaurant_directory.data.source.fetch_document") as mock_fetch:
            mock_fetch.return_value = {"restaurants": [{"name": "A"}]}
            assert load_raw_collection("https://example.com/r.json", timeout=1) == [{"name": "A"}]
            mock_fetch.assert_called_once_with("https://example.com/r.json", timeout=1)

    def test_path_goes_to_disk(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[]", encoding="utf-8")
        assert load_raw_collection(str(path)) == []
