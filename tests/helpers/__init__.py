"""Shared helpers for the fuzzy_select test suite."""
