"""
Runtime side of the metadata registry.

metadata/adapter_metadata.py binds each generated metadata file with
import_metadata() and indexes it by MetadataKey in MetadataFiles.
"""

import json
from pathlib import Path
from typing import Any

from .errors import MetadataMissingError
from .keys import MetadataKey

# metadata file paths are relative to the repository root
REPO_ROOT = Path(__file__).resolve().parents[1]


def import_metadata(relative_path: str) -> Any:
    with open(REPO_ROOT / relative_path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_metadata(key: MetadataKey) -> Any:
    from .adapter_metadata import MetadataFiles

    try:
        return MetadataFiles[key]
    except KeyError:
        raise MetadataMissingError(key) from None
