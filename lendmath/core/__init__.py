"""
Core math primitives, domain models, and data contracts.

Pure functions over scaled integers; no network I/O and no persistence.
"""
