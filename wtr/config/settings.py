"""
Configuration settings for the register toolkit.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). All settings are validated
at construction, ensuring fail-fast behavior if configuration is missing or invalid.

**Why centralized config?**
  - Single source of truth for the register URL, local paths and schema revision.
  - Easy to test (inject fake settings instead of reading from environment).
  - Fail-fast validation (unknown schema revision -> clear error at startup,
    not halfway through a 100k-row load).

**Rule**: Library functions in wtr.data never read the environment. They take
a schema / path / settings argument. Only the outermost convenience layer
(wtr.data.loaders and the actions/ scripts) falls back to get_settings().

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from wtr.data.schemas import DEFAULT_SCHEMA_REVISION, SCHEMA_REVISIONS

# Project root is 3 levels up from wtr/config/settings.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load .env from project root (no-op when the file is absent)
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

DEFAULT_REGISTER_URL = (
    "http://static.ofcom.org.uk/static/radiolicensing/html/register/WTR.csv"
)
DEFAULT_DATA_DIR = PROJECT_ROOT / "data" / "raw"


@dataclass(frozen=True)
class RegisterSettings:
    """
    Configuration for acquiring and interpreting the WTR register.

    **Conceptual**: Ofcom publishes the register as one large CSV. This settings
    object stores where to fetch it from, where to keep the local copy, how the
    bytes are encoded and which schema revision describes its columns.

    Attributes:
        url: Where the published register CSV lives.
        data_dir: Directory holding the local copy (default: data/raw/).
        filename: Name of the local copy inside data_dir (default: WTR.csv).
        encoding: Text encoding of the CSV bytes (default: utf-8).
        schema_revision: Name of the FieldSchema used to map columns
                         (see wtr.data.schemas.SCHEMA_REVISIONS).
        timeout_seconds: HTTP request timeout in seconds (default 60).
                         The register is tens of megabytes.
    """
    url: str = DEFAULT_REGISTER_URL
    data_dir: Path = DEFAULT_DATA_DIR
    filename: str = "WTR.csv"
    encoding: str = "utf-8"
    schema_revision: str = DEFAULT_SCHEMA_REVISION
    timeout_seconds: int = 60

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.url:
            raise ValueError(
                "WTR_REGISTER_URL is set but empty. "
                "Unset it to use the default Ofcom URL, or point it at a mirror."
            )
        if not self.filename:
            raise ValueError("WTR_FILENAME must not be empty.")
        if self.schema_revision not in SCHEMA_REVISIONS:
            raise ValueError(
                f"WTR_SCHEMA_REVISION must be one of {sorted(SCHEMA_REVISIONS)}, "
                f"got: {self.schema_revision!r}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got: {self.timeout_seconds}"
            )

    @property
    def csv_path(self) -> Path:
        """Full path of the local register copy."""
        return Path(self.data_dir) / self.filename

    @classmethod
    def from_env(cls) -> "RegisterSettings":
        """
        Load register settings from environment variables.

        **Environment variables** (all optional):
          - WTR_REGISTER_URL: URL of the published CSV.
          - WTR_DATA_DIR: Directory for the local copy.
          - WTR_FILENAME: File name of the local copy.
          - WTR_CSV_ENCODING: Text encoding of the CSV.
          - WTR_SCHEMA_REVISION: "v1" or "v2".
          - WTR_TIMEOUT_SECONDS: HTTP timeout in seconds.

        Returns:
            RegisterSettings object with values loaded from environment.

        Raises:
            ValueError: If a value is present but invalid.

        Usage example:
            >>> # In .env file:
            >>> # WTR_SCHEMA_REVISION=v1
            >>>
            >>> settings = RegisterSettings.from_env()
            >>> print(settings.csv_path)  # ".../data/raw/WTR.csv"
        """
        timeout_str = os.getenv("WTR_TIMEOUT_SECONDS", "60")
        try:
            timeout_seconds = int(timeout_str)
        except ValueError:
            raise ValueError(
                f"WTR_TIMEOUT_SECONDS must be an integer, got: {timeout_str}"
            )

        return cls(
            url=os.getenv("WTR_REGISTER_URL", DEFAULT_REGISTER_URL),
            data_dir=Path(os.getenv("WTR_DATA_DIR", str(DEFAULT_DATA_DIR))),
            filename=os.getenv("WTR_FILENAME", "WTR.csv"),
            encoding=os.getenv("WTR_CSV_ENCODING", "utf-8"),
            schema_revision=os.getenv("WTR_SCHEMA_REVISION", DEFAULT_SCHEMA_REVISION),
            timeout_seconds=timeout_seconds,
        )


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the toolkit.

    **Conceptual**: Top-level settings object aggregating all subsystem settings.
    Only the register is configurable today; new subsystems get their own
    frozen dataclass and a field here.

    Attributes:
        register: Register acquisition and interpretation settings.
    """
    register: RegisterSettings = field(default_factory=RegisterSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load global settings from environment variables."""
        return cls(register=RegisterSettings.from_env())


# Lazily-initialised singleton. Tests create Settings(...) directly or call reset_settings().
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached for reuse.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If an environment variable holds an invalid value.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          reset_settings()
          monkeypatch.setenv("WTR_SCHEMA_REVISION", "v1")
          assert get_settings().register.schema_revision == "v1"
      ```
    """
    global _default_settings
    _default_settings = None
