"""Errors raised by the metadata build. All of them abort the run."""

from typing import List


class MetadataBuildError(Exception):
    """Base class for metadata build failures."""


class ProviderMissingError(MetadataBuildError):
    def __init__(self, chain_id):
        self.chain_id = chain_id
        super().__init__(f"No provider configured for chain {chain_id}")


class ChecksumViolationError(MetadataBuildError):
    """Metadata payload contains addresses that are not in checksum format."""

    def __init__(self, key, addresses: List[str]):
        self.key = key
        self.addresses = list(addresses)
        super().__init__(
            f"{len(self.addresses)} non-checksummed address(es) in metadata for {key.identifier}"
        )


class RegistryParseError(MetadataBuildError):
    """The registry source file could not be parsed."""


class StructuralMismatchError(MetadataBuildError):
    """The registry source file does not have the shape the transformer edits."""


class IdentifierCollisionError(StructuralMismatchError):
    """A generated identifier is already bound to a different metadata file."""


class FormatterError(MetadataBuildError):
    """The formatting pass failed for a file about to be written."""


class MetadataMissingError(MetadataBuildError, KeyError):
    def __init__(self, key):
        self.key = key
        super().__init__(f"Metadata file not registered: {key.file_path}")

    def __str__(self) -> str:
        return self.args[0]
