"""YAML frontmatter parsing for markdown documents."""

from __future__ import annotations

import re
from typing import Any

import yaml

from edgedoc.core.logging import get_logger

log = get_logger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def split_frontmatter(text: str, path: str = "<string>") -> tuple[dict[str, Any], str]:
    """Split a document into (metadata, body).

    A missing block gives empty metadata. A malformed block is logged and
    also gives empty metadata, so one bad document never stops a batch.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return {}, text

    body = text[match.end() :]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        log.warning("frontmatter_malformed", file=path, error=str(e))
        return {}, body

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        log.warning("frontmatter_not_mapping", file=path, type=type(data).__name__)
        return {}, body
    return data, body


def as_str_list(value: Any) -> list[str]:
    """Coerce a frontmatter value to a list of non-empty strings.

    Accepts a scalar, a list of scalars, or a list of mappings with a
    ``path``/``file``/``id``/``name`` key.
    """
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        items: list[Any] = [value]
    elif isinstance(value, list):
        items = value
    else:
        return []

    result: list[str] = []
    for item in items:
        if isinstance(item, dict):
            item = next(
                (item[k] for k in ("path", "file", "id", "name") if item.get(k) is not None),
                None,
            )
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in result:
            result.append(text)
    return result


def as_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
