"""
loadorder - deterministic load ordering for content packages

loadorder discovers mod directories across layered search roots, merges them
with override and conflict rules, and resolves their declared dependencies
into a single load order.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
