"""
Registry source transformer.

metadata/adapter_metadata.py is a hand-maintained module that the build
extends. It has two splice points:

    1. the leading import block, where each metadata file is bound to a name:

        AaveV2ATokenEthereumATokenV2 = import_metadata("adapters/aave-v2/...json")

    2. the MetadataFiles declaration, a dict built from a list of pairs:

        MetadataFiles = dict(
            [
                (
                    metadata_key(
                        protocol_id=Protocol.AaveV2,
                        product_id="a-token",
                        chain_id=Chain.Ethereum,
                        file_key="a-token-v2",
                    ),
                    AaveV2ATokenEthereumATokenV2,
                ),
            ]
        )

The module is parsed with `ast` only to locate those splice points; the text
around them is kept byte for byte. Both edits are no-ops when the entry is
already present. New imports go in at their sorted position within the import
block and new entries go in before the first entry that sorts after them,
so the result does not depend on the order files are registered in. Comments
in the import block and the list stay where they are.
"""

from __future__ import annotations

import ast
import json
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import IdentifierCollisionError, RegistryParseError, StructuralMismatchError
from .keys import MetadataKey
from .sorting import sort_entries
from .writer import Formatter, write_and_format_file

REGISTRY_NAME = "MetadataFiles"
IMPORT_LOADER = "import_metadata"
KEY_BUILDER = "metadata_key"
INDENT = "    "


def _parse(source: str, filename: str = "<registry>") -> ast.Module:
    try:
        return ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise RegistryParseError(f"Cannot parse {filename}: {e}") from e


def _literal(value: str) -> str:
    return json.dumps(value)


def _split_lines(source: str) -> List[str]:
    # only "\n" ends a line for ast positions; str.splitlines also breaks on \f, \x1c, ...
    return re.findall(r"[^\n]*\n|[^\n]+$", source)


def _offset(lines: List[str], lineno: int, col_offset: int) -> int:
    """Character offset of an ast (lineno, col_offset) position; col_offset counts UTF-8 bytes."""
    line = lines[lineno - 1]
    return sum(len(prior) for prior in lines[: lineno - 1]) + len(
        line.encode("utf-8")[:col_offset].decode("utf-8")
    )


def _newline(source: str) -> str:
    return "\r\n" if "\r\n" in source else "\n"


def _line_start(source: str, offset: int) -> int:
    return source.rfind("\n", 0, offset) + 1


def _leading_whitespace(text: str) -> str:
    return text[: len(text) - len(text.lstrip())]


# ------------------------------------------------------------------ imports


def _is_docstring(stmt: ast.stmt) -> bool:
    return (
        isinstance(stmt, ast.Expr)
        and isinstance(stmt.value, ast.Constant)
        and isinstance(stmt.value.value, str)
    )


def _metadata_import(stmt: ast.stmt) -> Optional[Tuple[str, str]]:
    """(name, path) for `Name = import_metadata("path")`, else None."""
    if not isinstance(stmt, ast.Assign) or len(stmt.targets) != 1:
        return None
    target, value = stmt.targets[0], stmt.value
    if not isinstance(target, ast.Name) or not isinstance(value, ast.Call):
        return None
    if not isinstance(value.func, ast.Name) or value.func.id != IMPORT_LOADER:
        return None
    if len(value.args) != 1 or value.keywords:
        return None
    path = value.args[0]
    if not isinstance(path, ast.Constant) or not isinstance(path.value, str):
        return None
    return target.id, path.value


def _is_import(stmt: ast.stmt) -> bool:
    return isinstance(stmt, (ast.Import, ast.ImportFrom)) or _metadata_import(stmt) is not None


def _import_block(tree: ast.Module) -> List[ast.stmt]:
    """Leading run of docstring / import statements."""
    block: List[ast.stmt] = []
    for index, stmt in enumerate(tree.body):
        if _is_import(stmt) or (index == 0 and _is_docstring(stmt)):
            block.append(stmt)
            continue
        break
    return block


def add_metadata_import(source: str, tree: ast.Module, key: MetadataKey) -> str:
    identifier = key.identifier
    path = key.file_path

    for stmt in tree.body:
        existing = _metadata_import(stmt)
        if existing is None or existing[0] != identifier:
            continue
        if existing[1] != path:
            raise IdentifierCollisionError(
                f"{identifier} already imports {existing[1]!r}, expected {path!r}"
            )
        return source

    newline = _newline(source)
    statement = f"{identifier} = {IMPORT_LOADER}({_literal(path)}){newline}"
    lines = _split_lines(source)
    block = _import_block(tree)
    insert_at = block[-1].end_lineno if block else 0
    # metadata imports stay sorted by identifier; the tail of the block otherwise
    for stmt in block:
        existing = _metadata_import(stmt)
        if existing is not None and existing[0] > identifier:
            insert_at = stmt.lineno - 1
            break
    if insert_at and not lines[insert_at - 1].endswith("\n"):
        lines[insert_at - 1] += newline
    lines.insert(insert_at, statement)
    return "".join(lines)


# ------------------------------------------------------------------ entries


def _assigns(stmt: ast.stmt, name: str) -> bool:
    if isinstance(stmt, ast.Assign):
        return any(isinstance(target, ast.Name) and target.id == name for target in stmt.targets)
    if isinstance(stmt, ast.AnnAssign):
        return isinstance(stmt.target, ast.Name) and stmt.target.id == name
    return False


def _registry_list(tree: ast.Module) -> ast.List:
    declarations = [stmt for stmt in tree.body if _assigns(stmt, REGISTRY_NAME)]
    if len(declarations) != 1:
        raise StructuralMismatchError(
            f"Expected exactly one {REGISTRY_NAME} declaration, found {len(declarations)}"
        )
    value = declarations[0].value
    if (
        not isinstance(value, ast.Call)
        or not isinstance(value.func, ast.Name)
        or value.func.id != "dict"
        or len(value.args) != 1
        or value.keywords
        or not isinstance(value.args[0], ast.List)
    ):
        raise StructuralMismatchError(f"Incorrectly typed {REGISTRY_NAME} dict([...]) expression")
    return value.args[0]


def _entry_identifier(element: ast.expr) -> str:
    if (
        not isinstance(element, ast.Tuple)
        or len(element.elts) != 2
        or not isinstance(element.elts[1], ast.Name)
    ):
        raise StructuralMismatchError(
            f"Unexpected {REGISTRY_NAME} entry at line {element.lineno}: expected (key, Name) pair"
        )
    return element.elts[1].id


def _key_fields(node: ast.expr) -> Optional[Dict[str, str]]:
    if (
        not isinstance(node, ast.Call)
        or not isinstance(node.func, ast.Name)
        or node.func.id != KEY_BUILDER
        or node.args
    ):
        return None
    return {keyword.arg: ast.dump(keyword.value) for keyword in node.keywords}


def render_entry(key: MetadataKey, indent: str = "", newline: str = "\n") -> str:
    """Source for one (metadata_key(...), Identifier) pair; continuation lines use `indent`."""
    inner = indent + INDENT
    return newline.join(
        [
            "(",
            f"{inner}{KEY_BUILDER}(",
            f"{inner}{INDENT}protocol_id=Protocol.{key.protocol_id.name},",
            f"{inner}{INDENT}product_id={_literal(key.product_id)},",
            f"{inner}{INDENT}chain_id=Chain.{key.chain_id.name},",
            f"{inner}{INDENT}file_key={_literal(key.file_key)},",
            f"{inner}),",
            f"{inner}{key.identifier},",
            f"{indent})",
        ]
    )


def _check_registered(element: ast.Tuple, key: MetadataKey) -> None:
    expected = ast.parse(render_entry(key), mode="eval").body.elts[0]
    existing_fields = _key_fields(element.elts[0])
    if existing_fields is not None and existing_fields != _key_fields(expected):
        raise IdentifierCollisionError(
            f"{key.identifier} is already registered under a different metadata key"
        )


def add_metadata_entry(source: str, tree: ast.Module, key: MetadataKey) -> str:
    """
    Insert the entry for `key` into the MetadataFiles list.

    The new entry goes in before the entry that sorts after it (along with
    any comment lines directly above that entry), or after the last entry.
    Existing entries and comments are not touched. A list written on a single
    line is laid out one entry per line.
    """
    identifier = key.identifier
    entries = _registry_list(tree)
    names = [_entry_identifier(element) for element in entries.elts]

    if identifier in names:
        _check_registered(entries.elts[names.index(identifier)], key)
        return source

    newline = _newline(source)
    lines = _split_lines(source)
    start = _offset(lines, entries.lineno, entries.col_offset)
    end = _offset(lines, entries.end_lineno, entries.end_col_offset)
    close = end - 1
    base_indent = _leading_whitespace(source[_line_start(source, start):start])
    item_indent = base_indent + INDENT

    if entries.lineno == entries.end_lineno:
        segments = [
            (name, ast.get_source_segment(source, element))
            for name, element in zip(names, entries.elts)
        ]
        segments.append((identifier, render_entry(key, item_indent, newline)))
        sort_entries(segments, key=lambda segment: segment[0])
        rendered = (
            "[" + newline
            + "".join(f"{item_indent}{text},{newline}" for _, text in segments)
            + f"{base_indent}]"
        )
        return source[:start] + rendered + source[end:]

    ordered = sort_entries(names + [identifier], key=lambda name: name)
    position = ordered.index(identifier)

    if position + 1 < len(ordered):
        index = names.index(ordered[position + 1])
        element = entries.elts[index]
        element_start = _offset(lines, element.lineno, element.col_offset)
        indent = source[_line_start(source, element_start):element_start]
        if indent.strip():
            # shares its line with "[" or another entry
            return source[:element_start] + render_entry(key, item_indent, newline) + ", " + source[element_start:]

        floor = entries.elts[index - 1].end_lineno if index else entries.lineno
        lineno = element.lineno
        while lineno - 1 > floor and lines[lineno - 2].lstrip().startswith("#"):
            lineno -= 1
        insert_at = sum(len(line) for line in lines[: lineno - 1])
        text = f"{indent}{render_entry(key, indent, newline)},{newline}"
        return source[:insert_at] + text + source[insert_at:]

    if not entries.elts:
        # multi-line empty list: "]" opens its own line
        close_line = _line_start(source, close)
        indent = source[close_line:close] + INDENT
        text = f"{indent}{render_entry(key, indent, newline)},{newline}"
        return source[:close_line] + text + source[close_line:]

    last = entries.elts[-1]
    last_start = _offset(lines, last.lineno, last.col_offset)
    last_end = _offset(lines, last.end_lineno, last.end_col_offset)
    indent = source[_line_start(source, last_start):last_start]
    if indent.strip():
        indent = item_indent
    entry = render_entry(key, indent, newline)

    if last.end_lineno == entries.end_lineno:
        # only whitespace and an optional comma between the last entry and "]"
        return source[:last_end] + f",{newline}{indent}{entry},{newline}{base_indent}" + source[close:]

    comma = "" if source[last_end:close].lstrip().startswith(",") else ","
    insert_at = sum(len(line) for line in lines[: last.end_lineno])
    return (
        source[:last_end] + comma + source[last_end:insert_at]
        + f"{indent}{entry},{newline}" + source[insert_at:]
    )


# ------------------------------------------------------------------ file level


def transform_registry_source(source: str, key: MetadataKey, filename: str = "<registry>") -> str:
    """Return the registry source with `key` imported and registered."""
    source = add_metadata_import(source, _parse(source, filename), key)
    source = add_metadata_entry(source, _parse(source, filename), key)
    try:
        ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise StructuralMismatchError(f"Edited {filename} no longer parses: {e}") from e
    return source


def read_registry_source(registry_file: Path) -> str:
    # newline="" keeps "\r\n" line endings as they are on disk
    with open(registry_file, "r", encoding="utf-8", newline="") as f:
        return f.read()


def render_static_import(registry_file: Path, key: MetadataKey) -> str:
    """Registry source with `key` registered, read fresh from disk. Nothing is written."""
    registry_file = Path(registry_file)
    return transform_registry_source(read_registry_source(registry_file), key, filename=str(registry_file))


def add_static_import(
    registry_file: Path,
    key: MetadataKey,
    format_file: Optional[Formatter] = None,
) -> None:
    """
    Register one metadata file in the registry module.

    The file is read fresh on every call so edits made earlier in the same
    build (or by hand) are picked up. Nothing is written unless all edits
    succeed.
    """
    write_and_format_file(registry_file, render_static_import(registry_file, key), format_file)
