"""Shared helpers for the provcode test suite."""
