"""Test helper utilities for job board tests."""

from .fixture_store import FixtureStore, load_fixture_records

__all__ = ["FixtureStore", "load_fixture_records"]
