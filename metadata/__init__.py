"""Metadata build: key derivation, validation, artifact writes and registry edits."""
__all__ = [
    "keys",
    "address_validation",
    "writer",
    "sorting",
    "source_transformer",
    "registry",
    "build",
    "errors",
]
