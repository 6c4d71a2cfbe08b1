"""
cache_to_file: serve adapter metadata from the committed metadata files.

    class AaveV2ATokenPoolAdapter(AaveBasePoolAdapter):
        @cache_to_file(file_key="a-token-v2")
        async def get_protocol_tokens(self):
            ...

Called normally, the decorated method returns the metadata registered in
metadata/adapter_metadata.py for this (protocol, product, chain, file key),
without touching the chain. Called with write_to_file=True (what the metadata
build does) it runs the wrapped method and returns MetadataDetails so the
build can write and register the result.
"""

import functools

from adapters.base import MetadataDetails
from metadata.keys import metadata_key
from metadata.registry import get_metadata


def cache_to_file(file_key: str):
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, write_to_file: bool = False):
            key = metadata_key(
                protocol_id=self.protocol_id,
                product_id=self.product_id,
                chain_id=self.chain_id,
                file_key=file_key,
            )
            if not write_to_file:
                return get_metadata(key)
            metadata = await method(self)
            return MetadataDetails(metadata=metadata, file_details=key)

        wrapper.file_key = file_key
        return wrapper

    return decorator
