"""Tests for the config tree engine."""
