"""
Scoped file writes with a formatting pass.

Every file the build produces goes through write_and_format_file:
    1. content is written to a hidden temporary sibling of the target
    2. the formatter (if any) rewrites the temporary file in place
    3. os.replace moves the result onto the target

If any step fails the temporary file is removed and the target is left as it
was, so a target is either the previous version or the full new one.
"""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .errors import FormatterError
from .keys import MetadataKey

Formatter = Callable[[Path], None]


def _temp_path(path: Path) -> Path:
    return path.with_name(f".{path.stem}.tmp{path.suffix}")


def write_and_format_file(path: Path, content: str, format_file: Optional[Formatter] = None) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = _temp_path(path)
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if format_file is not None:
            format_file(tmp)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def command_formatter(commands: Mapping[str, Sequence[str]]) -> Formatter:
    """
    Build a formatter from {suffix: argv} pairs, e.g.
        {".py": ["ruff", "format", "--quiet", "{path}"]}

    Files whose suffix has no command are left as written.
    """
    table: Dict[str, list] = {suffix: list(argv) for suffix, argv in commands.items() if argv}

    def format_file(path: Path) -> None:
        argv = table.get(path.suffix)
        if not argv:
            return
        argv = [part.replace("{path}", str(path)) for part in argv]
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as e:
            raise FormatterError(f"Could not run formatter {argv[0]!r}: {e}") from e
        if result.returncode != 0:
            raise FormatterError(
                f"Formatter {argv[0]!r} failed on {path} (exit {result.returncode}): {result.stderr.strip()}"
            )

    return format_file


def serialize_metadata(metadata: Any) -> str:
    return json.dumps(metadata, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_metadata_file(
    metadata_root: Path,
    key: MetadataKey,
    metadata: Any,
    format_file: Optional[Formatter] = None,
) -> Path:
    """Write one metadata artifact and return its absolute path."""
    path = Path(metadata_root) / key.file_path
    write_and_format_file(path, serialize_metadata(metadata), format_file)
    return path
