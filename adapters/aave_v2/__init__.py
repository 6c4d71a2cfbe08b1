"""Aave v2 lending pool adapters: aTokens, stable and variable debt tokens."""
