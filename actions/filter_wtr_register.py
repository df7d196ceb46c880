#!/usr/bin/env python3
"""
Filter the local register copy and write the selected licences to a new CSV.

**Usage**:
    python actions/filter_wtr_register.py --list-companies
    python actions/filter_wtr_register.py --point-to-point --output data/processed/p2p.csv
    python actions/filter_wtr_register.py --company "Vodafone Limited" --company "MBNL" \\
        --product-code 301010 --valid-ngr --output data/processed/vodafone_mbnl.csv

All selections are combined with AND; repeated --company / --product-code
values are combined with OR. The output file has exactly the input columns.

**Example output**:
    $ python actions/filter_wtr_register.py --point-to-point --output p2p.csv
    Loading register from data/raw/WTR.csv (schema v2)...
      ✓ Loaded 183412 rows
      ✓ Selected 40211 rows
      ✓ Saved to p2p.csv
    Done!
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path so we can import wtr modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wtr.config.settings import get_settings
from wtr.data.filters import (
    Predicate,
    filter_companies,
    filter_point_to_point,
    filter_product_codes,
    filter_valid_ngr,
)
from wtr.data.io import read_register_csv, write_register_csv
from wtr.data.product_codes import PRODUCT_CODE_LOOKUP
from wtr.data.schemas import SchemaValidationError, get_schema


def parse_args(argv=None):
    """
    Parse command line arguments.

    Returns:
        Namespace with attributes: input, output, schema, company (list),
        product_code (list), point_to_point, valid_ngr, list_companies.
    """
    parser = argparse.ArgumentParser(
        description="Filter the Ofcom Wireless Telegraphy Register",
    )

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Register CSV to read (default: data/raw/WTR.csv from settings)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Where to write the filtered CSV (omit to only print counts)",
    )
    parser.add_argument(
        "--schema",
        type=str,
        default=None,
        help="Schema revision of the input file, e.g. v1 or v2 (default: WTR_SCHEMA_REVISION)",
    )
    parser.add_argument(
        "--company",
        action="append",
        default=[],
        help="Keep rows for this licensee company (repeatable)",
    )
    parser.add_argument(
        "--product-code",
        action="append",
        default=[],
        help="Keep rows with this 6-digit product code (repeatable)",
    )
    parser.add_argument(
        "--point-to-point",
        action="store_true",
        help="Keep only point-to-point fixed links (product code 301010)",
    )
    parser.add_argument(
        "--valid-ngr",
        action="store_true",
        help="Keep only rows with a well-formed 10-figure NGR",
    )
    parser.add_argument(
        "--list-companies",
        action="store_true",
        help="Print the distinct licensee companies of the selection and exit",
    )

    return parser.parse_args(argv)


def build_predicates(args) -> list[Predicate]:
    """
    Translate parsed arguments into predicates for LicenceCollection.filter.

    Raises:
        ValueError: An unknown product code was requested.
    """
    predicates: list[Predicate] = []
    if args.company:
        predicates.append(filter_companies(*args.company))
    if args.product_code:
        predicates.append(filter_product_codes(*args.product_code, known_codes=PRODUCT_CODE_LOOKUP))
    if args.point_to_point:
        predicates.append(filter_point_to_point)
    if args.valid_ngr:
        predicates.append(filter_valid_ngr)
    return predicates


def main(argv=None):
    """
    Main entry point for the script.

    **Exit codes**:
      - 0: Success
      - 1: Usage / configuration error (bad schema name, unknown product code)
      - 2: Fatal error (input missing or malformed)
    """
    args = parse_args(argv)

    try:
        register = get_settings().register
        schema = get_schema(args.schema or register.schema_revision)
        predicates = build_predicates(args)
    except (ValueError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    input_path = Path(args.input) if args.input else register.csv_path
    print(f"Loading register from {input_path} (schema {schema.revision})...")

    try:
        collection = read_register_csv(input_path, schema=schema, encoding=register.encoding)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except SchemaValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(f"  ✓ Loaded {len(collection)} rows")

    # Nobody else holds this collection, so filter the row list in place
    collection.filter_in_place(*predicates)
    print(f"  ✓ Selected {len(collection)} rows")

    if args.list_companies:
        for company in collection.get_companies():
            print(company)
        return

    if args.output:
        write_register_csv(collection, args.output, encoding=register.encoding)
        print(f"  ✓ Saved to {args.output}")

    print("Done!")


if __name__ == "__main__":
    main()
