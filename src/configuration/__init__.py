"""Configuration tree population and validation.

This package walks caller-defined configuration trees, asks every nested
record implementing the `Config` protocol to populate itself, loads the
environment file cascade beforehand and validates the populated tree
against the constraints declared on its fields.
"""
