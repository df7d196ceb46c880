"""
Acquisition adapters for the published register.

Thin clients that turn a remote source into a byte stream (or a local file)
without any knowledge of the register's columns.
"""
