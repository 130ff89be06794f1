"""Test suite for fuzzy_select."""
