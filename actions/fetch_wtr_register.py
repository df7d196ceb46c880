#!/usr/bin/env python3
"""
Download the Ofcom Wireless Telegraphy Register and save it to data/raw/.

**Usage**:
    python actions/fetch_wtr_register.py
    python actions/fetch_wtr_register.py --output data/raw/WTR_2024.csv
    python actions/fetch_wtr_register.py --force

**What this script does**:
  1. Load register settings from environment (.env file)
  2. Skip the download if the local copy exists (unless --force)
  3. Stream the CSV to disk via OfcomClient
  4. Load it once with the configured schema revision as a sanity check
  5. Print summary (rows, columns, extension columns found, file location)

**Example output**:
    $ python actions/fetch_wtr_register.py
    Downloading register from http://static.ofcom.org.uk/.../WTR.csv...
      ✓ Saved to data/raw/WTR.csv
      ✓ Loaded 183412 rows x 46 columns (schema v2)
      ✓ Extension columns: none
    Done!
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path so we can import wtr modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wtr.config.settings import RegisterSettings, get_settings
from wtr.data.collection import LicenceCollection
from wtr.data.io import read_register_csv
from wtr.data.schemas import SchemaValidationError, get_schema
from wtr.venues.ofcom_client import OfcomClient, OfcomClientError, OfcomNotFoundError


def parse_args(argv=None):
    """
    Parse command line arguments.

    Returns:
        Namespace with attributes: output (str | None), force (bool)
    """
    parser = argparse.ArgumentParser(
        description="Download the Ofcom Wireless Telegraphy Register CSV",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Destination CSV path (default: WTR_DATA_DIR/WTR_FILENAME, i.e. data/raw/WTR.csv)",
        default=None,
    )

    parser.add_argument(
        "--force",
        action="store_true",
        help="Download even if the destination already exists",
    )

    return parser.parse_args(argv)


def summarise_download(collection: LicenceCollection) -> list[str]:
    """
    Build the human-readable summary lines printed after a download.

    Kept separate from main() so it can be tested without network access.
    """
    present = collection.schema.extensions_present(collection.header)
    extension_labels = ", ".join(spec.label for spec in present) or "none"
    return [
        f"Loaded {len(collection)} rows x {len(collection.header)} columns "
        f"(schema {collection.schema.revision})",
        f"Extension columns: {extension_labels}",
    ]


def fetch_register(register: RegisterSettings, output: Path, force: bool = False) -> Path:
    """Download the register to output unless it exists and force is False."""
    if output.exists() and not force:
        print(f"  ⚠ {output} already exists, skipping download (use --force to replace)")
        return output

    print(f"Downloading register from {register.url}...")
    with OfcomClient(register) as client:
        path = client.download_register(output)
    print(f"  ✓ Saved to {path}")
    return path


def main(argv=None):
    """
    Main entry point for the script.

    **Exit codes**:
      - 0: Success
      - 1: Configuration error (invalid environment settings)
      - 2: Fatal error (download failed, downloaded file malformed)
    """
    args = parse_args(argv)

    try:
        register = get_settings().register
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = Path(args.output) if args.output else register.csv_path

    try:
        path = fetch_register(register, output, force=args.force)
        collection = read_register_csv(
            path,
            schema=get_schema(register.schema_revision),
            encoding=register.encoding,
        )
    except OfcomNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except OfcomClientError as e:
        print(f"Error: download failed: {e}", file=sys.stderr)
        sys.exit(2)
    except SchemaValidationError as e:
        print(f"Error: downloaded register is malformed: {e}", file=sys.stderr)
        sys.exit(2)

    for line in summarise_download(collection):
        print(f"  ✓ {line}")
    print("Done!")


if __name__ == "__main__":
    main()
