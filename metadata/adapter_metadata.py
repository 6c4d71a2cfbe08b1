"""
Generated metadata files, indexed by metadata key.

The metadata imports and the MetadataFiles entries are maintained by
scripts/build_metadata.py. Add hand-written code below MetadataFiles.
"""

from adapters.protocols import Protocol
from config.chains import Chain
from metadata.keys import metadata_key
from metadata.registry import import_metadata

MetadataFiles = dict([])
