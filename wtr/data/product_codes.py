"""
Static lookup of numeric product codes to human-readable descriptions.

**Conceptual**: Ofcom identifies each licence product by a 6-digit code. This
table is the permissible set of codes: tests use it to validate a freshly
downloaded register, and presentation code uses it to label rows. It never
alters parsing or filtering.

The mapping is read-only. Pass it to whatever needs it (see
filters.filter_product_codes(known_codes=...)) rather than importing a
module-level global deep inside logic.

Descriptions are tidied, not Ofcom's verbatim wording.
"""

from types import MappingProxyType
from typing import Mapping

POINT_TO_POINT_PRODUCT_CODE = "301010"

PRODUCT_CODE_LOOKUP: Mapping[str, str] = MappingProxyType({
    # "250011": "Broadband Fixed Wireless Access (28 GHz- Guernsey)",
    "301010": "Fixed Links",
    "302010": "GHz CCTV",
    "304010": "Scanning Telemetry",
    "304020": "Scanning Telemetry",
    "305010": "Self Co-Ord Links",
    "306040": "Satellite (Permanent Earth Station)",
    "307030": "Satellite TES Cat1",
    "307040": "Satellite TES Cat2",
    "307050": "Satellite TES Cat3",
    "308010": "Satellite (Earth Station Network)",
    # "308030": "Satellite (Earth Station Network)",
    "308040": "Satellite (Non Fixed Satellite Earth Station)",
    "308130": "Network 2GHz Licence",
    "309010": "GNSS Repeater",
    "351010": "Coastal Station Radio International",
    "351020": "Coastal Station Radio UK",
    "351030": "Coastal Station Radio Marina",
    "351090": "Maritime Suppliers",
    "352010": "Maritime Navaids and Radar",
    "352020": "Differential Global Positioning System",
    "352030": "Automatic Identification System",
    "354010": "Coastal Station Radio (UK) Area Defined",
    "354020": "Coastal Station Radio (Int) Area Defined",
    "408010": "Business Radio Technically Assigned",
    "409020": "Business Radio (Public Safety Radio)",
    "409030": "Business Radio (GSM-R Railway Use)",
    "409510": "Business Radio Area Defined",
    "470807": "Aeronautical Station (Aeronautical Broadcast)",
    "470808": "Aeronautical Station (Aerodrome Surface and Operational",
    "502040": "Public Wireless Networks (2G Cellular Operator)",
    "502050": "Public Wireless Networks",
    "502081": "Public Wireless Networks (2G Cellular Operator - Guernsey)",
    "502082": "Public Wireless Networks (2G Cellular Operator - Isle of Man )",
    "502083": "Public Wireless Networks (2G Cellular Operator - Jersey)",
    "503010": "Spectrum Access 3.6 GHz",
    "503012": "Fixed Wireless Access (3.5 GHz - Isle of Man)",
    "503013": "Fixed Wireless Access (3.5 GHz - Jersey)",
    "503014": "Fixed Wireless Access (3.6 GHz - Guernsey)",
    "503015": "Fixed Wireless Access (3.6 GHz - Isle of Man)",
    "503016": "Fixed Wireless Access (3.6 GHz - Jersey)",
    "503017": "Fixed Wireless Access (10 GHz - Guernsey)",
    "503110": "Offshore",
    "511010": "Public Wireless Networks (3G Cellular Operator)",
    "511011": "Public Wireless Networks (3G Cellular Operator - Guernsey)",
    "511012": "Public Wireless Networks (3G Cellular Operator - Isle of Man)",
    "511013": "Public Wireless Networks (3G Cellular Operator - Jersey)",
    "513010": "Spectrum Access (3.5 GHz)",
    "521010": "Concurrent Spectrum Access (1781.7-1785 and 1876.7-1880 MHz)",
    "521020": "Spectrum Access Licence 412-414 and 422-424 MHz Bands",
    "521030": "Spectrum Access 10 - 40 GHz Bands",
    "521040": "Spectrum Access L Band (1452-1492 MHz)",
    "521050": "Spectrum Access: 28 GHz",
    "522080": "1785 MHz NI Award",
    "523010": "Spectrum Access 758 to 766 MHz",
    "523011": "Spectrum Access 542-550 MHz (Cardiff)",
    "523020": "Spectrum Access 3.4 GHz",
    "523022": "Spectrum Access 2.3 GHz",
    "525010": "Crown Recognised Spectrum Access",
    "525020": "Converted Spectrum Access",
    "541010": "Spectrum Access 800MHz and 2.6GHz",
    "551020": "Grant of RSA for Receive Only Earth Station (ROES)",
    "603020": "Miscellaneous",
    "604010": "High Duty Cycle Network Relay Points",
    "605010": "Manually Configurable White Space Devices",
})


def get_product_code_lookup() -> Mapping[str, str]:
    """Return the read-only product code -> description mapping."""
    return PRODUCT_CODE_LOOKUP


def describe_product_code(
    code: str,
    lookup: Mapping[str, str] = PRODUCT_CODE_LOOKUP,
) -> str:
    """
    Human-readable label for a product code.

    Unknown codes are returned unchanged so callers can display them as-is.

    Example:
        >>> describe_product_code("301010")
        'Fixed Links'
        >>> describe_product_code("999999")
        '999999'
    """
    return lookup.get(code.strip(), code)
