"""Compound v2 adapters."""
