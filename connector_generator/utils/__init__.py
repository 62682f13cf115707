"""Shared helpers used by every generator."""
