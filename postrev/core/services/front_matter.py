"""
Front-matter parser.

A post may begin with a metadata block delimited by marker lines::

    ---
    title: Apache Spark serialize
    categories: [spark]
    tags:
      - spark
      - kryo
    ---
    body text...

The block is YAML but only a *flat* mapping is accepted: values are scalars
(stored as ``str``) or sequences of scalars (stored as ``tuple[str, ...]``).
``block + body`` always reproduces the input text exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

import yaml

from postrev.core.domain.entities import FrontMatter, freeze_front_matter
from postrev.core.errors import MalformedFrontMatterError

__all__ = ["MARKER", "ParsedFrontMatter", "parse_front_matter", "split_front_matter"]

MARKER = "---"


@dataclass(frozen=True)
class ParsedFrontMatter:
    front_matter: FrontMatter
    body: str
    block: str  # opening marker .. closing marker line, "" if absent


BOM = "\ufeff"


def _is_marker(line: str) -> bool:
    return line.rstrip() == MARKER


def split_front_matter(raw_text: str) -> Tuple[str, Optional[str], str]:
    """Return ``(block, inner_yaml, body)``; ``inner_yaml`` is None when no block."""
    lines = raw_text.split("\n")
    # a leading BOM stays in the block so the round-trip holds
    if not _is_marker(lines[0].removeprefix(BOM)):
        return "", None, raw_text

    for idx in range(1, len(lines)):
        if _is_marker(lines[idx]):
            block = "\n".join(lines[: idx + 1])
            if idx + 1 < len(lines):
                block += "\n"
            inner = "\n".join(lines[1:idx])
            return block, inner, raw_text[len(block) :]

    raise MalformedFrontMatterError(
        f"front matter opened with '{MARKER}' but never closed"
    )


def _scalar(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        raise MalformedFrontMatterError(f"key '{key}' holds a nested structure")
    return str(value)


def _coerce(data: Dict[Any, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        key = str(key)
        if isinstance(value, (list, tuple)):
            out[key] = tuple(_scalar(key, v) for v in value)
        else:
            out[key] = _scalar(key, value)
    return out


def parse_front_matter(raw_text: str) -> ParsedFrontMatter:
    """Split and parse the leading metadata block of ``raw_text``.

    Raises
    ------
    MalformedFrontMatterError
        The block is never closed, is not valid YAML, or is not a flat mapping.
    """
    block, inner, body = split_front_matter(raw_text)
    if inner is None:
        return ParsedFrontMatter(freeze_front_matter({}), body, block)

    try:
        data = yaml.safe_load(inner)
    except yaml.YAMLError as e:
        raise MalformedFrontMatterError(f"invalid YAML in front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}"
        )

    return ParsedFrontMatter(freeze_front_matter(_coerce(data)), body, block)
