"""
Typed licence records: parsing raw columns into records and rendering them back.

**Conceptual**: A LicenceRecord is one row of the register after normalisation.
It holds:
  - Every core field as text, exactly as it will be written back (after the
    schema's normalisers have run).
  - Every *present* extension field twice: the verbatim source string (for
    exact round-trip, e.g. "51.500000" stays "51.500000") and the parsed
    int/float (for computation).

Records are immutable. Enrichment (e.g. adding computed grid coordinates)
goes through with_extensions(), which returns a new record.

**Rendering rule**: Output columns are driven by a header, never by the
record. Unknown labels render as "", extension labels that were never
populated render as the numeric zero ("0" / "0.0").
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from wtr.data.normalization import split_product_code
from wtr.data.schemas import (
    ExtensionFieldParseError,
    FieldSchema,
    FieldSpec,
)

Number = Union[int, float]


@dataclass(frozen=True, eq=False)
class LicenceRecord:
    """
    One normalised register row.

    Records compare by identity: two rows with identical values are still two
    licences as far as filtering is concerned.

    Attributes:
        schema: The FieldSchema the record was parsed with.
        texts: Canonical field name -> text (core fields and present extensions).
        numbers: Extension field name -> parsed int/float (present extensions only).
    """
    schema: FieldSchema = field(repr=False)
    texts: Mapping[str, str]
    numbers: Mapping[str, Number] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "texts", MappingProxyType(dict(self.texts)))
        object.__setattr__(self, "numbers", MappingProxyType(dict(self.numbers)))

    def __getitem__(self, name: str) -> str:
        """Text of any field by canonical name ("" when not populated)."""
        self.schema.field_named(name)  # KeyError for names outside the schema
        return self.texts.get(name, "")

    def has_extension(self, name: str) -> bool:
        return name in self.numbers

    def number(self, name: str) -> Number:
        """
        Numeric value of an extension field.

        Returns the field kind's zero (0 or 0.0) when the column was absent.
        """
        spec = self.schema.field_named(name)
        if not spec.extension:
            raise KeyError(f"{name!r} is a core text field, not an extension field")
        return self.numbers.get(name, spec.kind())

    # -- frequently used core fields -------------------------------------

    @property
    def licence_number(self) -> str:
        return self.texts.get("licence_number", "")

    @property
    def ngr(self) -> str:
        return self.texts.get("ngr", "")

    @property
    def frequency(self) -> str:
        return self.texts.get("frequency", "")

    @property
    def antenna_height(self) -> str:
        return self.texts.get("antenna_height", "")

    @property
    def licensee_company(self) -> str:
        return self.texts.get("licensee_company", "")

    @property
    def product_code(self) -> str:
        return self.texts.get("product_code", "")

    @property
    def product_description(self) -> str:
        return self.texts.get("product_description", "")

    @property
    def product_description_31(self) -> str:
        return self.texts.get("product_description_31", "")

    @property
    def product_description_32(self) -> str:
        return self.texts.get("product_description_32", "")

    @property
    def numeric_product_code(self) -> str:
        """The 6-digit product code, wherever this schema revision keeps it."""
        return self.texts.get(self.schema.product_code_field, "")

    def frequency_as_float(self) -> float:
        """Frequency parsed as float; 0.0 when blank or unparsable."""
        return _float_or_zero(self.frequency)

    def antenna_height_as_float(self) -> float:
        """Antenna height parsed as float; 0.0 when blank or unparsable."""
        return _float_or_zero(self.antenna_height)

    def with_extensions(self, **values: Union[Number, str]) -> "LicenceRecord":
        """
        Return a copy with extension fields populated.

        Numbers are stored as given and rendered with str(). Strings are
        parsed with the field's kind and kept verbatim for output.

        Example:
            >>> enriched = record.with_extensions(os_easting=412345, wgs84_latitude="51.500000")
            >>> enriched.number("wgs84_latitude")
            51.5

        Raises:
            ValueError: Unknown or non-extension field name, unparsable text,
                        or a non-integral number for an int field.
        """
        texts = dict(self.texts)
        numbers = dict(self.numbers)

        for name, value in values.items():
            try:
                spec = self.schema.field_named(name)
            except KeyError:
                spec = None
            if spec is None or not spec.extension:
                raise ValueError(
                    f"{name!r} is not an extension field of schema {self.schema.revision!r}. "
                    f"Extension fields: {[s.name for s in self.schema.extension_fields]}"
                )

            if isinstance(value, str):
                text = value
                number = spec.kind(value)
            else:
                number = spec.kind(value)
                if number != value:
                    raise ValueError(
                        f"{name!r} holds {spec.kind.__name__} values, got {value!r}"
                    )
                text = str(number)

            texts[name] = text
            numbers[name] = number

        return LicenceRecord(schema=self.schema, texts=texts, numbers=numbers)

    def to_columns(self, header: Sequence[str]) -> list[str]:
        """
        Render this record as one output row aligned with header.

        - Core fields: stored text verbatim.
        - Extension fields: preserved source text; "0" / "0.0" if never populated.
        - Labels unknown to the schema: "".
        """
        row = []
        for label in header:
            spec = self.schema.field_for_label(label)
            if spec is None:
                row.append("")
            elif spec.extension and spec.name not in self.texts:
                row.append(spec.zero_text)
            else:
                row.append(self.texts.get(spec.name, ""))
        return row


def parse_record(
    columns: Mapping[str, str],
    schema: FieldSchema,
    present_extensions: Sequence[FieldSpec] = (),
    row_number: Optional[int] = None,
) -> LicenceRecord:
    """
    Convert one raw row into a LicenceRecord.

    **Functionally**:
      - Core fields are copied, missing columns become "".
      - Per-field normalisers run (NGR whitespace, company abbreviation).
      - v1 splits a combined product code / description.
      - Each extension in present_extensions is parsed as int or float.

    Args:
        columns: Header label -> raw string for this row.
        schema: Field schema of the source revision.
        present_extensions: Extension fields whose labels are in the table's
                            header (computed once per load by the caller).
        row_number: 1-based data row number for error messages.

    Returns:
        A new LicenceRecord.

    Raises:
        ExtensionFieldParseError: A present extension value is not numeric.
    """
    texts = {}
    for spec in schema.core_fields:
        value = columns.get(spec.label, "")
        if spec.normalizer is not None:
            value = spec.normalizer(value)
        texts[spec.name] = value

    if schema.splits_product_code:
        texts["product_code"], texts["product_description"] = split_product_code(
            texts["product_code"], texts["product_description"],
        )

    numbers = {}
    for spec in present_extensions:
        raw = columns.get(spec.label, "")
        try:
            numbers[spec.name] = spec.kind(raw)
        except ValueError:
            raise ExtensionFieldParseError(
                label=spec.label,
                row_number=row_number if row_number is not None else 0,
                value=raw,
                kind=spec.kind,
            ) from None
        texts[spec.name] = raw

    return LicenceRecord(schema=schema, texts=texts, numbers=numbers)


def _float_or_zero(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0
