"""Unit tests for the diagnostics package."""
