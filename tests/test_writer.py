"""Tests for metadata file writes and the formatting pass."""

import json
import sys

import pytest

from adapters.protocols import Protocol
from config.chains import Chain
from metadata.errors import FormatterError
from metadata.keys import metadata_key
from metadata.writer import (
    command_formatter,
    serialize_metadata,
    write_and_format_file,
    write_metadata_file,
)

KEY = metadata_key(
    protocol_id=Protocol.AaveV2,
    product_id="stable-debt-token",
    chain_id=Chain.Ethereum,
    file_key="stable-debt-token-v2",
)


def test_serialize_is_sorted_and_indented():
    text = serialize_metadata({"b": 1, "a": {"d": [1, 2], "c": "x"}})
    assert text == '{\n  "a": {\n    "c": "x",\n    "d": [\n      1,\n      2\n    ]\n  },\n  "b": 1\n}\n'


def test_write_metadata_file_creates_canonical_path(tmp_path):
    path = write_metadata_file(tmp_path, KEY, {"x": 1})
    assert path == tmp_path / "adapters/aave-v2/products/stable-debt-token/metadata/ethereum.stable-debt-token-v2.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"x": 1}


def test_write_is_idempotent(tmp_path):
    payload = {"z": [3, 2, 1], "a": {"name": "Ünïcode"}}
    path = write_metadata_file(tmp_path, KEY, payload)
    first = path.read_bytes()
    write_metadata_file(tmp_path, KEY, dict(reversed(list(payload.items()))))
    assert path.read_bytes() == first
    assert "Ünïcode" in first.decode("utf-8")


def test_formatter_output_is_persisted(tmp_path):
    target = tmp_path / "out.json"

    def upper(path):
        path.write_text(path.read_text().upper())

    write_and_format_file(target, "abc\n", upper)
    assert target.read_text() == "ABC\n"
    assert list(tmp_path.iterdir()) == [target]


def test_failed_format_leaves_target_untouched(tmp_path):
    target = tmp_path / "out.json"
    target.write_text("previous\n")

    def broken(path):
        raise FormatterError("boom")

    with pytest.raises(FormatterError):
        write_and_format_file(target, "next\n", broken)
    assert target.read_text() == "previous\n"
    assert list(tmp_path.iterdir()) == [target]


def test_command_formatter_runs_command_for_suffix(tmp_path):
    script = "import sys, pathlib; p = pathlib.Path(sys.argv[1]); p.write_text(p.read_text().strip() + '  # formatted\\n')"
    format_file = command_formatter({".py": [sys.executable, "-c", script, "{path}"]})
    target = tmp_path / "module.py"
    write_and_format_file(target, "x = 1\n", format_file)
    assert target.read_text() == "x = 1  # formatted\n"

    other = tmp_path / "data.json"
    write_and_format_file(other, "{}\n", format_file)
    assert other.read_text() == "{}\n"


def test_command_formatter_failure(tmp_path):
    format_file = command_formatter({".py": [sys.executable, "-c", "import sys; sys.exit(3)", "{path}"]})
    with pytest.raises(FormatterError):
        write_and_format_file(tmp_path / "module.py", "x = 1\n", format_file)
    assert not (tmp_path / "module.py").exists()


def test_command_formatter_missing_executable(tmp_path):
    format_file = command_formatter({".json": ["definitely-not-a-formatter-binary", "{path}"]})
    with pytest.raises(FormatterError):
        write_and_format_file(tmp_path / "a.json", "{}\n", format_file)
