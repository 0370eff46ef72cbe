"""Core library for loadorder (discovery, merging, resolution)."""
