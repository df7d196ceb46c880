"""
Field schemas and validation errors for the WTR register CSV.

**Conceptual**: This module defines the "data contract" between the untyped
CSV table (header labels + string cells) and the typed LicenceRecord. A
FieldSchema is an ordered list of FieldSpec descriptors, one per field the
record can hold:
  - Core fields: always expected in the header. A missing column yields "".
  - Extension fields: numeric columns appended to the register by an external
    process (grid coordinates). Presence is detected once per load from the
    header, and only present extensions are parsed.

**Schema revisions**: Ofcom's file has changed over time. Rather than one
record class per revision, each revision is a FieldSchema value:
  - v1: combined "Product Code" field (split on load), abbreviated company
    names, OSGB36 / WGS84 E/N extension columns.
  - v2: numeric product code in "Product Description 31", OS Easting/Northing
    and WGS84 Longitude/Latitude extension columns, point-to-point selection
    also requires a well-formed NGR.

Adding a revision means declaring another FieldSchema and registering it in
SCHEMA_REVISIONS.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from wtr.data.normalization import abbreviate_company, normalize_ngr


class SchemaValidationError(Exception):
    """
    Raised when register data does not conform to the expected schema.

    **Usage**: Catch this in scripts to report and halt processing. Loads are
    all-or-nothing, so no partial collection exists when this is raised.
    """
    pass


class MalformedTableError(SchemaValidationError):
    """
    Raised when the delimited text itself is broken.

    Ragged rows (too few or too many fields) and unterminated quotes end up
    here. The load is aborted; there is no recovery.
    """
    pass


class ExtensionFieldParseError(SchemaValidationError):
    """
    Raised when a present extension column holds a non-numeric value.

    Extension columns are only present when a trusted upstream process added
    them, so a bad value means the whole file is corrupt or incompatible.
    The value is never silently defaulted.

    Attributes:
        label: Header label of the offending column (e.g. "OS Easting").
        row_number: 1-based data row number (the header is not counted).
        value: The raw string that failed to parse.
    """

    def __init__(self, label: str, row_number: int, value: str, kind: type):
        self.label = label
        self.row_number = row_number
        self.value = value
        super().__init__(
            f"Column {label!r}, data row {row_number}: could not convert "
            f"{value!r} to {kind.__name__}. Extension columns must be numeric "
            f"in every row when present."
        )


@dataclass(frozen=True)
class FieldSpec:
    """
    One field of the record type.

    Attributes:
        name: Canonical snake_case name used on LicenceRecord.
        label: Header label in the CSV.
        extension: True for optional numeric columns detected by header membership.
        kind: int or float for extension fields; None for core (text) fields.
        normalizer: Optional str -> str function applied on parse.
    """
    name: str
    label: str
    extension: bool = False
    kind: Optional[type] = None
    normalizer: Optional[Callable[[str], str]] = None

    def __post_init__(self):
        if self.extension and self.kind not in (int, float):
            raise ValueError(
                f"Extension field {self.name!r} must declare kind int or float, "
                f"got: {self.kind!r}"
            )

    @property
    def zero_text(self) -> str:
        """Canonical string of the numeric zero value ("0" or "0.0")."""
        return str(self.kind()) if self.kind is not None else ""


@dataclass(frozen=True)
class FieldSchema:
    """
    Ordered field descriptors for one revision of the register.

    Attributes:
        revision: Short revision name (e.g. "v2").
        fields: Every field the record can hold, in declaration order.
        product_code_field: Canonical name of the field holding the 6-digit
                            numeric product code used by filters.
        splits_product_code: Split "Product Code" into code + description on parse.
        point_to_point_requires_valid_ngr: Point-to-point selection also checks
                                           the NGR is well formed.
    """
    revision: str
    fields: tuple[FieldSpec, ...]
    product_code_field: str = "product_code"
    splits_product_code: bool = False
    point_to_point_requires_valid_ngr: bool = False
    _by_name: dict = field(init=False, repr=False, compare=False)
    _by_label: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        by_name = {}
        by_label = {}
        for spec in self.fields:
            if spec.name in by_name:
                raise ValueError(f"Duplicate field name {spec.name!r} in schema {self.revision!r}")
            if spec.label in by_label:
                raise ValueError(f"Duplicate header label {spec.label!r} in schema {self.revision!r}")
            by_name[spec.name] = spec
            by_label[spec.label] = spec

        if self.product_code_field not in by_name:
            raise ValueError(
                f"product_code_field {self.product_code_field!r} is not a field of "
                f"schema {self.revision!r}"
            )

        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(self, "_by_label", by_label)

    def __hash__(self):
        return hash((self.revision, self.fields))

    @property
    def core_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if not spec.extension)

    @property
    def extension_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.extension)

    @property
    def core_labels(self) -> list[str]:
        """Header labels of the core fields, in declaration order."""
        return [spec.label for spec in self.core_fields]

    def field_named(self, name: str) -> FieldSpec:
        """Look up a field by canonical name. Raises KeyError if unknown."""
        return self._by_name[name]

    def field_for_label(self, label: str) -> Optional[FieldSpec]:
        """Look up a field by header label; None when the label is unknown."""
        return self._by_label.get(label)

    def extensions_present(self, header: Iterable[str]) -> tuple[FieldSpec, ...]:
        """
        Extension fields whose label appears in the header.

        Called once per load, never per row.
        """
        labels = set(header)
        return tuple(spec for spec in self.extension_fields if spec.label in labels)


def _core_fields(
    normalizers: dict[str, Callable[[str], str]],
) -> tuple[FieldSpec, ...]:
    """Build the 46 core fields shared by every revision, in source column order."""
    return tuple(
        FieldSpec(name=name, label=label, normalizer=normalizers.get(name))
        for name, label in CORE_COLUMNS
    )


# (canonical name, header label) in the order Ofcom publishes them.
CORE_COLUMNS: Sequence[tuple[str, str]] = (
    ("licence_number", "Licence Number"),
    ("licence_issue_date", "Licence issue date"),
    ("sid_lat_ns", "SID_LAT_N_S"),
    ("sid_lat_deg", "SID_LAT_DEG"),
    ("sid_lat_min", "SID_LAT_MIN"),
    ("sid_lat_sec", "SID_LAT_SEC"),
    ("sid_long_ew", "SID_LONG_E_W"),
    ("sid_long_deg", "SID_LONG_DEG"),
    ("sid_long_min", "SID_LONG_MIN"),
    ("sid_long_sec", "SID_LONG_SEC"),
    ("ngr", "NGR"),
    ("frequency", "Frequency"),
    ("frequency_type", "Frequency Type"),
    ("station_type", "Station Type"),
    ("channel_width", "Channel Width"),
    ("channel_width_type", "Channel Width type"),
    ("height_above_sea_level", "Height above sea level"),
    ("antenna_erp", "Antenna ERP"),
    ("antenna_erp_type", "Antenna ERP type"),
    ("antenna_type", "Antenna Type"),
    ("antenna_gain", "Antenna Gain"),
    ("antenna_azimuth", "Antenna AZIMUTH"),
    ("horizontal_elements", "Horizontal Elements"),
    ("vertical_elements", "Vertical Elements"),
    ("antenna_height", "Antenna Height"),  # resolution to 0.5m
    ("antenna_location", "Antenna Location"),
    ("efl_upper_lower", "EFL_UPPER_LOWER"),
    ("antenna_direction", "Antenna Direction"),
    ("antenna_elevation", "Antenna Elevation"),
    ("antenna_polarisation", "Antenna Polarisation"),
    ("antenna_name", "Antenna Name"),
    ("feeding_loss", "Feeding Loss"),
    ("fade_margin", "Fade Margin"),
    ("emission_code", "Emission Code"),
    ("ap_comment_intern", "AP_COMMENT_INTERN"),
    ("vector", "Vector"),
    ("licensee_surname", "Licencee Surname"),
    ("licensee_first_name", "Licencee First Name"),
    ("licensee_company", "Licencee Company"),
    ("status", "Status"),
    ("tradeable", "Tradeable"),
    ("publishable", "Publishable"),
    ("product_code", "Product Code"),
    ("product_description", "Product Description"),
    ("product_description_31", "Product Description 31"),  # numeric product code in v2
    ("product_description_32", "Product Description 32"),
)


WTR_V1_SCHEMA = FieldSchema(
    revision="v1",
    fields=_core_fields({
        "ngr": normalize_ngr,
        "licensee_company": abbreviate_company,
    }) + (
        FieldSpec("osgb36_eastings", "OSGB36 E", extension=True, kind=int),
        FieldSpec("osgb36_northings", "OSGB36 N", extension=True, kind=int),
        FieldSpec("wgs84_eastings", "WGS84 E", extension=True, kind=float),
        FieldSpec("wgs84_northings", "WGS84 N", extension=True, kind=float),
    ),
    product_code_field="product_code",
    splits_product_code=True,
    point_to_point_requires_valid_ngr=False,
)

WTR_V2_SCHEMA = FieldSchema(
    revision="v2",
    fields=_core_fields({
        "ngr": normalize_ngr,
    }) + (
        FieldSpec("os_easting", "OS Easting", extension=True, kind=int),
        FieldSpec("os_northing", "OS Northing", extension=True, kind=int),
        FieldSpec("wgs84_longitude", "WGS84 Longitude", extension=True, kind=float),
        FieldSpec("wgs84_latitude", "WGS84 Latitude", extension=True, kind=float),
    ),
    product_code_field="product_description_31",
    splits_product_code=False,
    point_to_point_requires_valid_ngr=True,
)

SCHEMA_REVISIONS = {
    WTR_V1_SCHEMA.revision: WTR_V1_SCHEMA,
    WTR_V2_SCHEMA.revision: WTR_V2_SCHEMA,
}

DEFAULT_SCHEMA_REVISION = WTR_V2_SCHEMA.revision


def get_schema(revision: str = DEFAULT_SCHEMA_REVISION) -> FieldSchema:
    """
    Resolve a schema revision by name.

    Raises:
        KeyError: If the revision is unknown (message lists the known ones).
    """
    try:
        return SCHEMA_REVISIONS[revision]
    except KeyError:
        raise KeyError(
            f"Unknown schema revision {revision!r}. Known revisions: {sorted(SCHEMA_REVISIONS)}"
        ) from None
