"""
wtr – Main entry point.

Minimal bootstrap script that reports the configured register location and
schema revision.
"""

from wtr.config.settings import get_settings


def main() -> None:
    """Print the active register configuration."""
    register = get_settings().register
    print(f"wtr ready: register {register.csv_path} (schema {register.schema_revision})")


if __name__ == "__main__":
    main()
