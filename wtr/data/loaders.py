"""
Convenience loader for the local register copy.

**Conceptual**: Scripts want "give me the register" without spelling out the
path, encoding and schema revision every time. This module resolves them
from settings and delegates to io.read_register_csv. It is the one place in
wtr.data that falls back to get_settings().
"""

from typing import Optional

from wtr.config.settings import Settings, get_settings
from wtr.data.collection import LicenceCollection
from wtr.data.io import read_register_csv
from wtr.data.schemas import get_schema
from wtr.venues.ofcom_client import OfcomClient


def load_register(
    settings: Optional[Settings] = None,
    download_if_missing: bool = False,
) -> LicenceCollection:
    """
    Load the register from settings.register.csv_path.

    Args:
        settings: Settings to use (default: get_settings()).
        download_if_missing: Fetch the register first when the local copy
                             doesn't exist yet.

    Returns:
        LicenceCollection parsed with the configured schema revision.

    Raises:
        FileNotFoundError: No local copy and download_if_missing is False.
        OfcomClientError: The download failed.
        SchemaValidationError: The file is malformed.
    """
    register = (settings or get_settings()).register
    path = register.csv_path

    if download_if_missing and not path.exists():
        with OfcomClient(register) as client:
            client.download_register(path)

    return read_register_csv(
        path,
        schema=get_schema(register.schema_revision),
        encoding=register.encoding,
    )
