"""
Configuration loading and validation for register settings.

Provides strongly typed settings objects for paths, environment variables,
and the schema revision used to interpret the register CSV.
"""
