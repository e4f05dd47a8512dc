"""Bracket-notation query strings for the CMS REST API.

The CMS expects nested parameters flattened into bracketed keys::

    filters[slug][$eq]=hello&pagination[page]=2&sort[0]=createdAt:desc

``build_query`` flattens nested dicts and lists into that form and
``parse_query`` rebuilds the nested structure from it.
"""

import re
from typing import Any
from urllib.parse import quote, unquote_plus

_SAFE_CHARS = "-_.!~*'()"
_KEY_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


def _encode(text: str) -> str:
    return quote(text, safe=_SAFE_CHARS)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), item, pairs)
        return
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
        return
    pairs.append((prefix, _format_value(value)))


def flatten_params(params: dict[str, Any]) -> list[tuple[str, str]]:
    """Flatten nested params into ordered ``(bracketed_key, value)`` pairs."""
    pairs: list[tuple[str, str]] = []
    _flatten("", params, pairs)
    return pairs


def build_query(params: dict[str, Any]) -> str:
    """
    Serialize nested parameters into a percent-encoded query string.

    Dict insertion order is preserved, so identical input always yields an
    identical string. ``None`` values are skipped; values are not validated.

    Args:
        params: Nested dicts/lists of scalar values

    Returns:
        Query string without a leading ``?``
    """
    return "&".join(f"{_encode(key)}={_encode(value)}" for key, value in flatten_params(params))


def _split_key(key: str) -> list[str]:
    head, bracket, rest = key.partition("[")
    if not bracket:
        return [key]
    segments = _KEY_SEGMENT_RE.findall("[" + rest)
    return [head, *segments] if segments else [key]


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    converted = {key: _listify(value) for key, value in node.items()}
    keys = list(converted)
    if keys and all(k.isdigit() for k in keys):
        indexes = sorted(int(k) for k in keys)
        if indexes == list(range(len(indexes))):
            return [converted[str(i)] for i in indexes]
    return converted


def parse_query(query: str) -> dict[str, Any]:
    """
    Parse a bracket-notation query string back into nested data.

    Dicts whose keys are exactly ``0..n-1`` become lists. Leaf values are
    always strings.
    """
    root: dict[str, Any] = {}
    query = query.lstrip("?")
    for part in query.split("&"):
        if not part:
            continue
        raw_key, _, raw_value = part.partition("=")
        segments = _split_key(unquote_plus(raw_key))
        value = unquote_plus(raw_value)

        node = root
        for segment in segments[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[segments[-1]] = value

    return _listify(root)
