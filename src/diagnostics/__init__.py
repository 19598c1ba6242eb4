"""Diagnostics for configuration trees.

This package renders configuration trees as indented text for debugging,
masking the values of fields whose names match a caller-supplied
sensitivity vocabulary.
"""
