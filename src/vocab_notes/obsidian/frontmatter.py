"""Frontmatter codec and fill-only merge for word notes.

The codec writes a canonical form (every scalar double quoted, ``null`` for
missing values, block collections) and reads it back with a full YAML loader.
Hand-authored frontmatter that does not look canonical is read with a
lightweight ``key: value`` line parser that only recovers top-level scalars.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from ..models import NOT_DEFINED
from ..utils.logging import get_logger

logger = get_logger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)
_LINE_RE = re.compile(r"^(\w+):\s*(.*)$")

# Lines this codec can emit; anything else means hand-authored frontmatter
_CANONICAL_LINE_RE = re.compile(r'^(\w+: (".*"|null|\[\]|\{\})|\w+:|  .*)$')

# Existing values the merge is allowed to overwrite
EMPTY_VALUES: tuple[Any, ...] = (None, "", NOT_DEFINED)


def _represent_none(representer: Any, data: None) -> Any:
    return representer.represent_scalar("tag:yaml.org,2002:null", "null")


def _dumper() -> YAML:
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    yaml.allow_unicode = True
    yaml.representer.add_representer(type(None), _represent_none)
    return yaml


def _to_node(value: Any) -> Any:
    """Convert a plain value into ruamel nodes with quoted scalars."""
    if value is None:
        return None
    if isinstance(value, bool):
        return DoubleQuotedScalarString("true" if value else "false")
    if isinstance(value, Mapping):
        node = CommentedMap()
        for key, item in value.items():
            node[str(key)] = _to_node(item)
        return node
    if isinstance(value, (list, tuple, set)):
        return CommentedSeq(_to_node(item) for item in value)
    return DoubleQuotedScalarString(str(value))


def serialize_frontmatter(mapping: Mapping[str, Any]) -> str:
    """Serialize a mapping to canonical YAML text without ``---`` fences.

    Key order follows the mapping's insertion order.
    """
    if not mapping:
        return ""
    output = StringIO()
    _dumper().dump(_to_node(mapping), output)
    return output.getvalue().rstrip("\n")


def parse_frontmatter_lines(block: str) -> dict[str, Any]:
    """Lightweight parser: one ``key: value`` per line, top-level scalars only.

    One layer of surrounding double quotes is removed. Lines that do not match
    are ignored, so malformed input yields a partial mapping.
    """
    result: dict[str, Any] = {}
    for line in block.splitlines():
        match = _LINE_RE.match(line)
        if not match:
            continue
        key, value = match.group(1), match.group(2).rstrip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        elif value == "null":
            value = None
        result[key] = value
    return result


def is_canonical_block(block: str) -> bool:
    """True when every line of the block could have been written by this codec."""
    lines = [line for line in block.splitlines() if line.strip()]
    return bool(lines) and all(_CANONICAL_LINE_RE.match(line) for line in lines)


def parse_frontmatter_block(block: str | None) -> dict[str, Any]:
    """Parse a frontmatter block. Never raises.

    Canonical blocks are loaded as full YAML so sequences and nested mappings
    come back; other blocks go through :func:`parse_frontmatter_lines`.
    """
    if not block or not block.strip():
        return {}

    if is_canonical_block(block):
        try:
            data = YAML(typ="safe", pure=True).load(block)
        except YAMLError as e:
            logger.debug("frontmatter_yaml_fallback", error=str(e))
        else:
            if isinstance(data, dict):
                return {str(key): value for key, value in data.items()}
            logger.debug("frontmatter_not_mapping", value_type=type(data).__name__)

    return parse_frontmatter_lines(block)


def split_frontmatter(text: str | None) -> tuple[str | None, str]:
    """Split note text into ``(frontmatter block, body)``.

    The block excludes the ``---`` fences; it is None when the note has none.
    """
    if not text:
        return None, ""
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None, text
    return match.group(1).rstrip("\n"), text[match.end() :]


def merge_frontmatter(
    existing: Mapping[str, Any], incoming: Mapping[str, Any]
) -> dict[str, Any]:
    """Fill-only merge of ``incoming`` into a copy of ``existing``.

    An existing value is replaced only when it is absent, None, an empty
    string or ``NOT_DEFINED``. Incoming None values are skipped. To force a
    new value the caller must clear the field first.
    """
    merged = dict(existing)
    for key, value in incoming.items():
        if value is None:
            continue
        current = merged.get(key)
        if key not in merged or (isinstance(current, (str, type(None))) and current in EMPTY_VALUES):
            merged[key] = value
    return merged
