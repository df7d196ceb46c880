"""
Tests for register file I/O and the settings-driven loader.

All tests use temporary directories (via tmp_path fixture) to avoid polluting
the real data/ directory.
"""

from unittest.mock import patch

import pytest

from conftest import CORE_LABELS, make_row, render_csv
from wtr.config.settings import RegisterSettings, Settings
from wtr.data.io import read_register_csv, write_register_csv
from wtr.data.loaders import load_register
from wtr.data.schemas import WTR_V1_SCHEMA


@pytest.fixture
def register_file(tmp_path):
    path = tmp_path / "raw" / "WTR.csv"
    path.parent.mkdir()
    rows = [
        make_row(licence_number="1", licensee_company="Vodafone Limited"),
        make_row(licence_number="2", licensee_company="Arqiva Limited"),
    ]
    path.write_text(render_csv(CORE_LABELS, rows), encoding="utf-8")
    return path


def test_read_register_csv(register_file):
    collection = read_register_csv(register_file)
    assert len(collection) == 2
    assert collection.header == tuple(CORE_LABELS)


def test_read_register_csv_with_schema(register_file):
    collection = read_register_csv(str(register_file), schema=WTR_V1_SCHEMA)
    assert collection.get_companies() == ["Arqiva Ltd", "Vodafone Ltd"]


def test_read_register_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Register CSV not found"):
        read_register_csv(tmp_path / "nope.csv")


def test_write_register_csv_creates_directories(register_file, tmp_path):
    collection = read_register_csv(register_file)
    out = tmp_path / "processed" / "nested" / "out.csv"

    write_register_csv(collection, out)

    assert out.read_text(encoding="utf-8") == register_file.read_text(encoding="utf-8")


def test_write_register_csv_encoding(tmp_path):
    source = tmp_path / "in.csv"
    source.write_bytes("Licencee Company\nCafé Radio\n".encode("latin-1"))

    collection = read_register_csv(source, encoding="latin-1")
    out = tmp_path / "out.csv"
    write_register_csv(collection, out, encoding="latin-1")

    assert out.read_bytes() == source.read_bytes()


def test_load_register_uses_settings(register_file):
    settings = Settings(register=RegisterSettings(
        data_dir=register_file.parent,
        schema_revision="v1",
    ))
    collection = load_register(settings)
    assert collection.schema is WTR_V1_SCHEMA
    assert len(collection) == 2


def test_load_register_missing_without_download(tmp_path):
    settings = Settings(register=RegisterSettings(data_dir=tmp_path))
    with pytest.raises(FileNotFoundError):
        load_register(settings)


def test_load_register_downloads_when_missing(tmp_path):
    settings = Settings(register=RegisterSettings(data_dir=tmp_path / "raw"))
    content = render_csv(CORE_LABELS, [make_row(licence_number="42")])

    def fake_download(self, path=None):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    with patch("wtr.data.loaders.OfcomClient.download_register", fake_download):
        collection = load_register(settings, download_if_missing=True)

    assert [row.licence_number for row in collection] == ["42"]


def test_load_register_does_not_download_existing(register_file):
    settings = Settings(register=RegisterSettings(data_dir=register_file.parent))
    with patch("wtr.data.loaders.OfcomClient.download_register") as mock_download:
        load_register(settings, download_if_missing=True)
    mock_download.assert_not_called()
