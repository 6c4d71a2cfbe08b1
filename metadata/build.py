"""
Metadata build.

Walks protocols x chains x adapters (registration order, filtered by the
caller), asks every adapter for its metadata, and for each result:

    validate checksums -> prepare the registry edit -> write the metadata
    file -> write metadata/adapter_metadata.py

Artifacts are processed strictly one at a time. Any error other than an
adapter's NotImplementedError stops the run; files written for earlier
adapters stay in place, nothing is left behind for the failing one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from adapters.base import MetadataDetails, ProtocolAdapter, is_metadata_builder
from adapters.protocols import Protocol
from config.chains import Chain, ChainName

from .address_validation import get_metadata_invalid_addresses
from .errors import ChecksumViolationError, ProviderMissingError
from .keys import MetadataKey
from .source_transformer import render_static_import
from .writer import Formatter, write_and_format_file, write_metadata_file


def _restore(path: Path, previous: Optional[bytes]) -> None:
    if previous is None:
        path.unlink(missing_ok=True)
    else:
        path.write_bytes(previous)


def commit_metadata(
    metadata_root: Path,
    registry_file: Path,
    key: MetadataKey,
    metadata,
    format_file: Optional[Formatter] = None,
) -> Path:
    """
    Write one metadata artifact and register it.

    The registry edit is worked out before anything is written, so a registry
    that cannot be edited stops the unit with no file touched. If writing the
    registry fails, the artifact is put back the way it was.
    """
    registry_source = render_static_import(registry_file, key)
    path = Path(metadata_root) / key.file_path
    previous = path.read_bytes() if path.exists() else None
    write_metadata_file(metadata_root, key, metadata, format_file)
    try:
        write_and_format_file(registry_file, registry_source, format_file)
    except BaseException:
        _restore(path, previous)
        raise
    return path


async def _call_capability(capability) -> Optional[MetadataDetails]:
    try:
        return await capability(write_to_file=True)
    except NotImplementedError:
        return None


async def fetch_metadata_details(adapter: ProtocolAdapter) -> Optional[MetadataDetails]:
    """
    Invoke the adapter's metadata-producing capability.

    Version 2 adapters expose get_protocol_tokens(); adapters with an explicit
    build_metadata() use that instead. None means nothing to register.
    """
    details = None
    if adapter.adapter_settings.version == 2:
        details = await _call_capability(adapter.get_protocol_tokens)
    if is_metadata_builder(adapter):
        details = await _call_capability(adapter.build_metadata)
    return details


async def build_metadata(
    adapters_controller,
    *,
    metadata_root: Path,
    registry_file: Path,
    protocol_filter: Optional[Iterable[Protocol]] = None,
    chain_filter: Optional[Iterable[Chain]] = None,
    format_file: Optional[Formatter] = None,
) -> List[MetadataKey]:
    """
    Build and register metadata files.

    :param adapters_controller: AdaptersController (supported_protocols + providers).
    :param protocol_filter: protocols to build, None for all.
    :param chain_filter: chains to build, None for all.
    :returns: keys of the metadata files written, in processing order.
    :raises ChecksumViolationError: an adapter returned non-checksummed
        addresses; its file is not written and no later adapter runs.
    """
    protocol_filter = None if protocol_filter is None else set(protocol_filter)
    chain_filter = None if chain_filter is None else set(chain_filter)
    written: List[MetadataKey] = []

    for protocol_id, supported_chains in adapters_controller.supported_protocols.items():
        if protocol_filter is not None and protocol_id not in protocol_filter:
            continue

        for chain_id in supported_chains:
            if chain_filter is not None and chain_id not in chain_filter:
                continue

            if chain_id not in adapters_controller.providers:
                raise ProviderMissingError(chain_id)

            adapters = adapters_controller.fetch_chain_protocol_adapters(chain_id, protocol_id)
            for product_id, adapter in adapters.items():
                details = await fetch_metadata_details(adapter)
                if details is None:
                    continue

                key = details.file_details
                invalid_addresses = get_metadata_invalid_addresses(details.metadata)
                if invalid_addresses:
                    raise ChecksumViolationError(key, invalid_addresses)

                path = commit_metadata(metadata_root, registry_file, key, details.metadata, format_file)
                written.append(key)
                print(f"[build-metadata] {protocol_id.value} {product_id} ({ChainName[chain_id]}) -> {path}")

    return written
