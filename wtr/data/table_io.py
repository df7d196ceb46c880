"""
Delimited-text reader and writer for the register table.

**Conceptual**: Pure format mechanics with no domain knowledge. A stream of
comma-delimited text becomes an ordered header (list of labels) plus one
ordered {label: raw string} dict per data row, and back again.

**Why every cell stays a string**: Many register columns look numeric
(frequency, heights, ERP) but must be written back byte-for-byte. pandas is
told not to infer dtypes and not to turn empty cells into NaN, so "0050"
stays "0050" and "" stays "".

**Rule**: Nothing outside this module calls pd.read_csv or DataFrame.to_csv
for register data.
"""

import io
import warnings
from typing import IO, Iterable, Sequence, Union

import pandas as pd

from wtr.data.schemas import MalformedTableError

Header = list[str]
RawRow = dict[str, str]


def read_table(
    source: Union[IO[bytes], IO[str]],
    encoding: str = "utf-8",
) -> tuple[Header, list[RawRow]]:
    """
    Split a delimited-text stream into header + raw rows.

    **Functionally**:
      - The first record is the header, taken exactly as written (empty and
        repeated labels included); each later record is one row.
      - Standard CSV quoting is honoured (embedded commas, quotes, newlines).
      - Every value is returned as the exact source string.
      - An empty stream yields ([], []).

    **Header handling**: every record is read as data (header=None) and the
    first one becomes the header, so pandas never renames labels ("NGR.1",
    "Unnamed: 1"). Any row longer than the header is a tokenizer error.

    Args:
        source: Readable binary or text stream.
        encoding: Used to decode binary streams (ignored for text streams).

    Returns:
        (header, rows) where rows[i] maps every header label to a string.
        With repeated labels the rightmost column's value wins.

    Raises:
        MalformedTableError: Broken quoting, or a row with more fields than
                             the header (or fewer, where pandas leaves the
                             missing cells unfilled).
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            frame = pd.read_csv(
                source,
                header=None,
                dtype=str,
                keep_default_na=False,
                na_filter=False,
                index_col=False,
                encoding=encoding,
            )
    except pd.errors.EmptyDataError:
        return [], []
    except pd.errors.ParserError as e:
        raise MalformedTableError(f"Failed to tokenize register CSV: {e}") from e
    except pd.errors.ParserWarning as e:
        raise MalformedTableError(f"Register CSV rows don't match the header: {e}") from e

    header = [str(label) for label in frame.iloc[0]]
    data = frame.iloc[1:]

    short_rows = data.isna().any(axis=1)
    if short_rows.any():
        first_bad = int(short_rows.to_numpy().nonzero()[0][0]) + 1
        raise MalformedTableError(
            f"Data row {first_bad} has fewer fields than the header "
            f"({len(header)} columns expected)."
        )

    rows = [dict(zip(header, values)) for values in data.itertuples(index=False, name=None)]
    return header, rows


def write_table(
    sink: Union[IO[bytes], IO[str]],
    header: Sequence[str],
    rows: Iterable[Sequence[str]],
    encoding: str = "utf-8",
) -> None:
    """
    Render header + rows as comma-delimited text.

    Values are written verbatim, quoted only where CSV requires it (embedded
    delimiter, quote or newline). Lines end with "\\n".

    Args:
        sink: Writable binary or text stream.
        header: Column labels, written first and in this order.
        rows: One sequence of strings per row, aligned with header.
        encoding: Used to encode text for binary sinks.
    """
    if not header:
        return

    frame = pd.DataFrame([list(row) for row in rows], columns=list(header), dtype=str)
    text = frame.to_csv(index=False, lineterminator="\n")

    if isinstance(sink, io.TextIOBase):
        sink.write(text)
    else:
        sink.write(text.encode(encoding))
