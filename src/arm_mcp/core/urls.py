"""Request URL composition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx


class ForeignOriginError(ValueError):
    """Raised when a path would resolve outside the configured origin."""


def compose_url(origin: str, path: str, query: Mapping[str, Any] | None = None) -> str:
    """Resolve `path` against `origin` and append `query`.

    Parameters already in `path` are kept. List values repeat the parameter name
    after them; scalar values replace them. `None` values are dropped.
    Raises `ForeignOriginError` when the result leaves `origin`.
    """
    base = httpx.URL(f"{origin}/")
    url = base.join(path)
    if (url.scheme, url.host, url.port) != (base.scheme, base.host, base.port):
        msg = f"path must stay on {origin}"
        raise ForeignOriginError(msg)

    items = list(url.params.multi_items())
    appended = False
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, list | tuple):
            items.extend((key, scalar_text(item)) for item in value)
        else:
            items = [item for item in items if item[0] != key]
            items.append((key, scalar_text(value)))
        appended = True
    if appended:
        url = url.copy_with(params=httpx.QueryParams(items))
    return str(url)


def is_origin_relative(path: str) -> bool:
    """True when `path` parses and names neither a scheme nor a host."""
    try:
        parsed = httpx.URL(path)
    except httpx.InvalidURL:
        return False
    return not parsed.scheme and not parsed.host and not path.lstrip().startswith("//")


def scalar_text(value: Any) -> str:
    """Render one scalar the way a JSON client would stringify it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_path_segment(value: str) -> str:
    return quote(value, safe="!~*'()")
