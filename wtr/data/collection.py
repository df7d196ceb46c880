"""
LicenceCollection: an ordered header plus an ordered sequence of records.

**Conceptual**: A collection is what you get from loading the register. The
header fixes the *shape* of serialisation (which columns, in which order);
the rows are the licences. The two are independent: filtering shrinks the
rows and never touches the header.

**Round-trip guarantee**: write_csv() emits exactly the header that was
loaded: same labels, same order, same count. Extension columns absent from
the source stay absent; unknown columns come back (empty) rather than vanish.

**Concurrency**: filter_in_place() rewrites the row list in place and is not
safe against concurrent readers of the same collection. Use filter() (which
never mutates the receiver) when a collection is shared.
"""

from typing import IO, Iterable, Iterator, Optional, Sequence, Union

from wtr.data.filters import Predicate
from wtr.data.records import LicenceRecord, parse_record
from wtr.data.schemas import FieldSchema, get_schema
from wtr.data.table_io import read_table, write_table


class LicenceCollection:
    """
    Header + rows for one loaded (or derived) register table.

    Attributes:
        header: Tuple of header labels; defines output column order.
        rows: List of LicenceRecord in source order. The constructor copies
              the iterable it is given, so each collection owns its list.
        schema: FieldSchema used to interpret the rows.
    """

    def __init__(
        self,
        header: Sequence[str],
        rows: Iterable[LicenceRecord],
        schema: FieldSchema,
    ):
        self.header = header if isinstance(header, tuple) else tuple(header)
        self.rows = list(rows)
        self.schema = schema

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[LicenceRecord]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return (
            f"LicenceCollection(schema={self.schema.revision!r}, "
            f"columns={len(self.header)}, rows={len(self.rows)})"
        )

    @classmethod
    def read_csv(
        cls,
        source: Union[IO[bytes], IO[str]],
        schema: Optional[FieldSchema] = None,
        encoding: str = "utf-8",
    ) -> "LicenceCollection":
        """
        Load a register table from a readable stream.

        **Functionally**:
          - Tokenises the stream into header + raw rows (table_io.read_table).
          - Detects which extension columns are present, once for the whole load.
          - Parses every raw row into a LicenceRecord, applying normalisation.

        Args:
            source: Readable binary or text stream of CSV.
            schema: Field schema of the source revision (default: latest).
            encoding: Decoding for binary streams.

        Returns:
            A new LicenceCollection.

        Raises:
            MalformedTableError: Broken quoting or ragged rows.
            ExtensionFieldParseError: A present extension value is not numeric.
        """
        schema = schema or get_schema()
        header, raw_rows = read_table(source, encoding=encoding)
        present = schema.extensions_present(header)

        rows = [
            parse_record(columns, schema, present, row_number=i)
            for i, columns in enumerate(raw_rows, start=1)
        ]
        return cls(header, rows, schema)

    def write_csv(self, sink: Union[IO[bytes], IO[str]], encoding: str = "utf-8") -> None:
        """Write the header, then one line per row, driven by self.header."""
        write_table(
            sink,
            self.header,
            (row.to_columns(self.header) for row in self.rows),
            encoding=encoding,
        )

    def get_companies(self) -> list[str]:
        """Distinct licensee company names, sorted ascending."""
        return sorted({row.licensee_company for row in self.rows})

    def filter(self, *predicates: Predicate) -> "LicenceCollection":
        """
        Return a new collection of the rows for which every predicate is True.

        Relative order is preserved. With no predicates every row is kept.
        The new collection shares this collection's header object; the
        receiver is not modified.
        """
        return LicenceCollection(
            self.header,
            [row for row in self.rows if all(p(row) for p in predicates)],
            self.schema,
        )

    def filter_in_place(self, *predicates: Predicate) -> "LicenceCollection":
        """
        As filter(), but overwrites this collection's own row list.

        The same list object is kept, so anything holding a reference to
        self.rows sees the result. Collections previously produced by filter()
        have their own lists and are unaffected.

        Returns:
            self, for chaining.
        """
        self.rows[:] = [row for row in self.rows if all(p(row) for p in predicates)]
        return self

    def widen_header(self, *labels: str) -> "LicenceCollection":
        """
        Return a collection whose header gains the given labels (if missing).

        Used to write extension columns added with LicenceRecord.with_extensions().
        The records are shared with the receiver; the row list is not.

        Example:
            >>> enriched = LicenceCollection(
            ...     collection.header,
            ...     [row.with_extensions(os_easting=e) for row, e in zip(collection, eastings)],
            ...     collection.schema,
            ... ).widen_header("OS Easting")
        """
        extra = [label for label in dict.fromkeys(labels) if label not in self.header]
        return LicenceCollection(self.header + tuple(extra), self.rows, self.schema)
