"""Shared builders for on-disk package trees and in-memory specs."""
