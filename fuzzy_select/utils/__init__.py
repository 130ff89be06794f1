"""Utility modules for fuzzy_select: settings, IO, logging, caching,
validation, metadata and performance instrumentation.
"""
