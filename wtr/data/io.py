"""
Local-file readers and writers for the register CSV.

**Conceptual**: The record layer only needs "a readable byte stream" to load
and "a writable byte stream" to render. This module is the thin file-system
side of that contract: open a path, hand the stream to LicenceCollection,
close it.

**Rule**: Scripts and loaders go through read_register_csv /
write_register_csv rather than opening register files themselves, so path
checks and directory creation live in one place.
"""

from pathlib import Path
from typing import Optional

from wtr.data.collection import LicenceCollection
from wtr.data.schemas import FieldSchema


def read_register_csv(
    path: Path | str,
    schema: Optional[FieldSchema] = None,
    encoding: str = "utf-8",
) -> LicenceCollection:
    """
    Load a register CSV from disk.

    Args:
        path: Path to the CSV (e.g. "data/raw/WTR.csv").
        schema: Field schema of the file's revision (default: latest).
        encoding: Text encoding of the file.

    Returns:
        LicenceCollection with the file's header and one record per row.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MalformedTableError: If the CSV is broken.
        ExtensionFieldParseError: If a present extension column is not numeric.

    Example:
        >>> collection = read_register_csv("data/raw/WTR.csv", schema=get_schema("v2"))
        >>> len(collection.header)
        46
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(
            f"Register CSV not found: {path}. "
            f"Run actions/fetch_wtr_register.py to download it, or check the path."
        )

    with path.open("rb") as stream:
        return LicenceCollection.read_csv(stream, schema=schema, encoding=encoding)


def write_register_csv(
    collection: LicenceCollection,
    path: Path | str,
    encoding: str = "utf-8",
) -> None:
    """
    Write a collection to disk, creating parent directories as needed.

    The file's columns are exactly collection.header, in order.

    Raises:
        OSError: If the file can't be written (permissions, disk full, etc.).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as stream:
        collection.write_csv(stream, encoding=encoding)
