"""
Tests for OfcomClient HTTP wrapper.

**Purpose**: Verify that OfcomClient requests the configured URL, writes the
body to disk, and raises the right exception for each failure mode.

**Testing philosophy**: Use mocked HTTP responses (no real network calls).
The real download is covered by test_register_real_data.py, which is opt-in.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from wtr.config.settings import RegisterSettings
from wtr.venues.ofcom_client import (
    OfcomClient,
    OfcomClientError,
    OfcomNotFoundError,
    OfcomServerError,
)

CSV_BODY = b"Licence Number,NGR\n1,AB 12345 67890\n"


@pytest.fixture
def register_settings(tmp_path):
    """RegisterSettings pointing at a fake URL and a temporary data directory."""
    return RegisterSettings(
        url="https://register.test/WTR.csv",
        data_dir=tmp_path / "raw",
        timeout_seconds=7,
    )


def make_response(status_code=200, content=CSV_BODY, chunks=None):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.iter_content.return_value = chunks if chunks is not None else [content]
    return response


def test_client_initialization(register_settings):
    client = OfcomClient(register_settings)
    assert client.settings is register_settings
    assert client.session.headers["Accept"] == "text/csv, */*"
    client.close()


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_fetch_register_success(mock_get, register_settings):
    mock_get.return_value = make_response()

    with OfcomClient(register_settings) as client:
        content = client.fetch_register()

    assert content == CSV_BODY
    mock_get.assert_called_once_with(
        "https://register.test/WTR.csv",
        timeout=7,
        stream=False,
    )


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_fetch_register_empty_body(mock_get, register_settings):
    mock_get.return_value = make_response(content=b"")
    with OfcomClient(register_settings) as client:
        with pytest.raises(OfcomClientError, match="Empty response"):
            client.fetch_register()


@pytest.mark.parametrize("status, error", [
    (404, OfcomNotFoundError),
    (500, OfcomServerError),
    (503, OfcomServerError),
    (403, OfcomClientError),
])
@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_fetch_register_http_errors(mock_get, status, error, register_settings):
    mock_get.return_value = make_response(status_code=status)
    with OfcomClient(register_settings) as client:
        with pytest.raises(error):
            client.fetch_register()


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_fetch_register_timeout(mock_get, register_settings):
    mock_get.side_effect = requests.Timeout("slow")
    with OfcomClient(register_settings) as client:
        with pytest.raises(requests.Timeout, match="timed out after 7s"):
            client.fetch_register()


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_fetch_register_connection_error(mock_get, register_settings):
    mock_get.side_effect = requests.ConnectionError("refused")
    with OfcomClient(register_settings) as client:
        with pytest.raises(OfcomClientError, match="Failed to connect"):
            client.fetch_register()


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_download_register_writes_file(mock_get, register_settings):
    mock_get.return_value = make_response(chunks=[CSV_BODY[:10], b"", CSV_BODY[10:]])

    with OfcomClient(register_settings) as client:
        path = client.download_register()

    assert path == register_settings.csv_path
    assert path.read_bytes() == CSV_BODY
    assert not path.with_name("WTR.csv.part").exists()
    assert mock_get.call_args.kwargs["stream"] is True


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_download_register_empty_body_leaves_nothing(mock_get, register_settings, tmp_path):
    mock_get.return_value = make_response(chunks=[])
    target = tmp_path / "out" / "WTR.csv"

    with OfcomClient(register_settings) as client:
        with pytest.raises(OfcomClientError):
            client.download_register(target)

    assert not target.exists()
    assert not target.with_name("WTR.csv.part").exists()


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_download_register_keeps_old_copy_on_http_error(mock_get, register_settings, tmp_path):
    target = tmp_path / "WTR.csv"
    target.write_bytes(b"old")
    mock_get.return_value = make_response(status_code=404)

    with OfcomClient(register_settings) as client:
        with pytest.raises(OfcomNotFoundError):
            client.download_register(target)

    assert target.read_bytes() == b"old"


@patch("wtr.venues.ofcom_client.requests.Session.get")
def test_download_register_broken_transfer_leaves_nothing(mock_get, register_settings, tmp_path):
    def broken_stream(chunk_size):
        yield CSV_BODY[:10]
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    response = make_response()
    response.iter_content.side_effect = broken_stream
    mock_get.return_value = response
    target = tmp_path / "WTR.csv"

    with OfcomClient(register_settings) as client:
        with pytest.raises(OfcomClientError, match="failed after 10 bytes"):
            client.download_register(target)

    assert not target.exists()
    assert not target.with_name("WTR.csv.part").exists()
    response.close.assert_called_once()
