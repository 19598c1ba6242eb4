"""Unit tests for the configuration package."""
