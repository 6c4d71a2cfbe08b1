#!/usr/bin/env python3
"""
Build adapter metadata files and register them in metadata/adapter_metadata.py.

For every supported (protocol, chain, adapter) that produces metadata, writes
adapters/<protocol-id>/products/<product-id>/metadata/<chain-name>.<file-key>.json
and adds the matching import and MetadataFiles entry to the registry module.

Usage:
    python -m scripts.build_metadata
    python -m scripts.build_metadata --protocols aave-v2 --chains ethereum,polygon
    python -m scripts.build_metadata -p compound-v2 --config path/to/build_config.yaml

Provider URLs come from DEFI_ADAPTERS_PROVIDER_<CHAIN> env vars (see config/build_config.yaml).
"""

import argparse
import asyncio
import sys
from typing import List, Optional

import yaml

from adapters.controller import AdaptersController
from config.rpc_config import build_chain_providers
from config.settings import load_build_settings
from metadata.build import build_metadata
from metadata.errors import ChecksumViolationError, MetadataBuildError
from scripts.command_filters import multi_chain_filter, multi_protocol_filter


def report_checksum_violation(error: ChecksumViolationError) -> None:
    print("\n".join(error.addresses), file=sys.stderr)
    print(
        "\n * The above addresses found in the metadata file are not in checksum format.",
        file=sys.stderr,
    )
    print(
        "\n * Please ensure that addresses are in checksum format by wrapping them with Web3.to_checksum_address.",
        file=sys.stderr,
    )
    print(
        "\n * Please checksum your addresses inside the adapter's metadata method "
        f"({error.key.protocol_id.value} / {error.key.product_id}).",
        file=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Build adapter metadata files and update the metadata registry.")
    p.add_argument("-p", "--protocols", help="comma-separated protocols filter (e.g. aave-v2,compound-v2)")
    p.add_argument("-c", "--chains", help="comma-separated chains filter (e.g. ethereum,matic,42161)")
    p.add_argument("--config", default=None, help="build config YAML (default: config/build_config.yaml)")
    args = p.parse_args(argv)

    try:
        protocol_filter = multi_protocol_filter(args.protocols)
        chain_filter = multi_chain_filter(args.chains)
    except ValueError as e:
        p.error(str(e))

    try:
        settings = load_build_settings(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[ERROR] Cannot load build config: {e}", file=sys.stderr)
        return 1
    controller = AdaptersController(build_chain_providers(settings))

    try:
        written = asyncio.run(
            build_metadata(
                controller,
                metadata_root=settings.metadata_root,
                registry_file=settings.registry_file,
                protocol_filter=protocol_filter,
                chain_filter=chain_filter,
                format_file=settings.formatter(),
            )
        )
    except ChecksumViolationError as e:
        report_checksum_violation(e)
        return 1
    except MetadataBuildError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(f"[build-metadata] {len(written)} metadata file(s) written")
    return 0


if __name__ == "__main__":
    sys.exit(main())
