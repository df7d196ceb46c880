"""
Register table I/O, schema enforcement, typed records and filtering.

Handles loading and writing the WTR CSV with strict round-trip guarantees:
the output header is always exactly the header that was loaded.
"""
