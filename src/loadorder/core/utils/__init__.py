"""Shared helpers for loadorder core modules."""
