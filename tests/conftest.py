"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import wtr...' works, and
provides small register tables shared across test modules.
"""
import io
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from wtr.config.settings import reset_settings
from wtr.data.schemas import CORE_COLUMNS

CORE_LABELS = [label for _, label in CORE_COLUMNS]


def make_row(**values: str) -> dict:
    """
    Build one raw register row keyed by header label.

    Keyword names are canonical field names (e.g. ngr="SU 12345 67890");
    every other core column is left empty.
    """
    label_for = dict(CORE_COLUMNS)
    row = {label: "" for label in CORE_LABELS}
    for name, value in values.items():
        row[label_for.get(name, name)] = value
    return row


def render_csv(header, rows) -> str:
    """
    Render header + row dicts as CSV text.

    Values must not contain commas, quotes or newlines (tests that need
    quoting write their CSV by hand).
    """
    lines = [",".join(header)]
    for row in rows:
        lines.append(",".join(row.get(label, "") for label in header))
    return "\n".join(lines) + "\n"


@pytest.fixture
def csv_bytes():
    """
    Factory fixture: (header, rows) -> readable binary stream.

    Example:
        >>> stream = csv_bytes(CORE_LABELS, [make_row(licence_number="1")])
    """
    def _build(header, rows):
        return io.BytesIO(render_csv(header, rows).encode("utf-8"))
    return _build


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Every test starts (and ends) with no cached settings singleton."""
    reset_settings()
    yield
    reset_settings()
