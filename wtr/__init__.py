"""
wtr - load, normalise, filter and re-write the Ofcom Wireless Telegraphy Register.

Sub-packages:
  - config: environment-driven settings (register URL, data directory, schema revision).
  - data: table reader/writer, field schemas, typed records, collections and filters.
  - venues: network acquisition of the published register.
"""
