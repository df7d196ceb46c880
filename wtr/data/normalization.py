"""
Parse-time normalisation rules for messy register values.

**Conceptual**: The published register carries a handful of values that are
inconsistent between rows (grid references with and without spaces, product
codes with the description glued on, long-winded company suffixes). These
functions tidy a single raw string (or, for the product code, a code /
description pair) and are attached to fields by the FieldSchema in schemas.py.

Every function here is pure and idempotent: applying it to its own output is
a no-op.
"""

import re

# Six digits, then at least one dash or space, then the description.
# Unanchored at the start, so a stray prefix before the digits is dropped.
PRODUCT_CODE_PATTERN = re.compile(r"([0-9]{6})[\- ]+(.*)$")

PRODUCT_CODE_LENGTH = 6

# Exact full-name matches rewritten to fixed short forms.
COMPANY_SHORT_NAMES = {
    "BRITISH TELECOMMUNICATIONS PUBLIC LIMITED COMPANY": "BT PLC",
    "MOBILE BROADBAND NETWORK LIMITED": "MBNL",
}

# Applied in order, first occurrence only, case-sensitive.
COMPANY_SUFFIX_ABBREVIATIONS = (
    ("Public Limited Company", "PLC"),
    ("PUBLIC LIMITED COMPANY", "PLC"),
    ("Limited", "Ltd"),
    ("LIMITED", "LTD"),
)


def normalize_ngr(value: str) -> str:
    """
    Remove all whitespace from a National Grid Reference.

    Example:
        >>> normalize_ngr("SU 123 456")
        'SU123456'
        >>> normalize_ngr(normalize_ngr("AB 12345 67890"))
        'AB1234567890'
    """
    return "".join(value.split())


def abbreviate_company(name: str) -> str:
    """
    Shorten a licensee company name so it fits labels and map balloons.

    Two well-known operators are replaced outright. Otherwise each suffix in
    COMPANY_SUFFIX_ABBREVIATIONS is replaced at most once, in order.

    Example:
        >>> abbreviate_company("MOBILE BROADBAND NETWORK LIMITED")
        'MBNL'
        >>> abbreviate_company("Vodafone Limited")
        'Vodafone Ltd'
    """
    if name in COMPANY_SHORT_NAMES:
        return COMPANY_SHORT_NAMES[name]

    for old, new in COMPANY_SUFFIX_ABBREVIATIONS:
        if old in name:
            name = name.replace(old, new, 1)
    return name


def split_product_code(code: str, description: str) -> tuple[str, str]:
    """
    Separate a product description that was appended to its product code.

    Both values are stripped first. The split only happens when the code is
    longer than PRODUCT_CODE_LENGTH and no description was supplied. A code
    that does not match PRODUCT_CODE_PATTERN is passed through unsplit.

    Args:
        code: Raw "Product Code" value (e.g. "301010 - Fixed Links").
        description: Raw "Product Description" value (often empty).

    Returns:
        (code, description) tuple.

    Example:
        >>> split_product_code("301010 - Fixed Links", "")
        ('301010', 'Fixed Links')
        >>> split_product_code("301010ABCDEF-Fixed Link", "")
        ('301010ABCDEF-Fixed Link', '')
    """
    code = code.strip()
    description = description.strip()

    if len(code) > PRODUCT_CODE_LENGTH and not description:
        match = PRODUCT_CODE_PATTERN.search(code)
        if match:
            code, description = match.group(1), match.group(2)

    return code, description
