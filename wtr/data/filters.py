"""
Predicates for selecting licence records.

**Conceptual**: A predicate is a plain function LicenceRecord -> bool. The
constructors here return predicates that are composed by passing several of
them to LicenceCollection.filter() / filter_in_place(); a record is kept only
if every predicate returns True.

Predicates are pure. They read the record (and, for product codes, the
record's own schema to find where the numeric code lives) and nothing else.

Example:
    >>> fixed_links = collection.filter(filter_point_to_point)
    >>> bt_links = collection.filter(filter_companies("BT PLC"), filter_valid_ngr)
"""

import re
from typing import Callable, Mapping, Optional

from wtr.data.product_codes import POINT_TO_POINT_PRODUCT_CODE
from wtr.data.records import LicenceRecord

Predicate = Callable[[LicenceRecord], bool]

# Two letters, optional space, 5-digit easting, optional space, 5-digit northing.
# Anchored at the end of the string only.
NGR_PATTERN = re.compile(r"[A-Z]{2} ?[0-9]{5} ?[0-9]{5}\Z")


def filter_valid_ngr(record: LicenceRecord) -> bool:
    """True when the record carries a well-formed 10-figure grid reference."""
    return NGR_PATTERN.search(record.ngr) is not None


def filter_point_to_point(record: LicenceRecord) -> bool:
    """
    Select point-to-point fixed links.

    The product code must be POINT_TO_POINT_PRODUCT_CODE. Schema revisions
    with point_to_point_requires_valid_ngr set (v2) also require a valid NGR.
    """
    if record.numeric_product_code != POINT_TO_POINT_PRODUCT_CODE:
        return False
    if record.schema.point_to_point_requires_valid_ngr:
        return filter_valid_ngr(record)
    return True


def filter_product_codes(
    *product_codes: str,
    known_codes: Optional[Mapping[str, str]] = None,
) -> Predicate:
    """
    Build a predicate matching any of the given 6-digit product codes.

    The code is read from the field named by the record's schema
    (product_code in v1, product_description_31 in v2).

    Args:
        *product_codes: Codes to allow (e.g. "301010", "305010").
        known_codes: Optional lookup (see product_codes.PRODUCT_CODE_LOOKUP).
                     When given, every requested code must be in it.

    Raises:
        ValueError: A requested code is not in known_codes.
    """
    if known_codes is not None:
        unknown = sorted(set(product_codes) - set(known_codes))
        if unknown:
            raise ValueError(
                f"Unknown product codes: {unknown}. "
                f"See wtr.data.product_codes.PRODUCT_CODE_LOOKUP for the permissible set."
            )

    lookup = frozenset(product_codes)

    def predicate(record: LicenceRecord) -> bool:
        return record.numeric_product_code in lookup

    return predicate


def filter_companies(*companies: str) -> Predicate:
    """
    Build a predicate matching any of the given licensee company names.

    Matching is exact, so pass names as they appear after loading (v1 rows
    carry abbreviated names such as "BT PLC" or "Vodafone Ltd").
    """
    lookup = frozenset(companies)

    def predicate(record: LicenceRecord) -> bool:
        return record.licensee_company in lookup

    return predicate
