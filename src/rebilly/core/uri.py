"""
URI value type and the path template expansion used for every request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import SplitResult, urlencode, urlsplit, urlunsplit

__all__ = ["PLACEHOLDER_PATTERN", "Uri", "build_query", "build_uri"]

PLACEHOLDER_PATTERN = re.compile(r"\{\w+\}")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Uri:
    """
    Immutable wrapper around a URI string.

    Both absolute (``https://host/path``) and relative (``bank-accounts/1``)
    forms are supported.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @property
    def _parts(self) -> SplitResult:
        return urlsplit(self.value)

    @property
    def scheme(self) -> str:
        return self._parts.scheme

    @property
    def host(self) -> str:
        return self._parts.netloc

    @property
    def path(self) -> str:
        return self._parts.path

    @property
    def query(self) -> str:
        return self._parts.query

    @property
    def is_absolute(self) -> bool:
        return bool(self.scheme and self.host)

    def with_query(self, query: str) -> "Uri":
        parts = self._parts
        return Uri(urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment)))

    def resolve(self, base: "Uri") -> "Uri":
        """
        Return this URI made absolute against ``base``.

        The path is appended to the base path, so a base of
        ``https://api.rebilly.com/v2.1`` turns ``websites`` into
        ``https://api.rebilly.com/v2.1/websites``. Absolute URIs are returned
        unchanged.
        """
        if self.is_absolute:
            return self
        parts = self._parts
        base_path = base.path.rstrip("/")
        path = f"{base_path}/{parts.path.lstrip('/')}"
        return Uri(urlunsplit((base.scheme, base.host, path, parts.query, parts.fragment)))


def _query_pairs(key: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _query_pairs(f"{key}[{sub_key}]", sub_value, pairs)
        return
    if isinstance(value, (list, tuple)):
        value = ",".join(_stringify(item) for item in value)
    pairs.append((key, _stringify(value)))


def build_query(params: Mapping[str, Any]) -> str:
    """
    Encode ``params`` as a query string in iteration order.

    ``None`` values are skipped, booleans become ``true``/``false`` and
    sequences are joined with commas. Nested mappings are written with
    bracketed keys, so ``{"filter": {"a": 1}}`` becomes ``filter[a]=1``.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _query_pairs(str(key), value, pairs)
    return urlencode(pairs)


def build_uri(template: Union[str, Uri], params: Optional[Mapping[str, Any]] = None) -> Uri:
    """
    Expand ``{name}`` placeholders in ``template`` with values from ``params``.

    Parameters that fill a placeholder are consumed; the rest are encoded into
    the query string. Placeholders without a matching parameter are left in
    place. When ``template`` is already a :class:`Uri`, non-empty ``params``
    replace its query string.
    """
    remaining: Dict[str, Any] = dict(params or {})

    if isinstance(template, Uri):
        if remaining:
            return template.with_query(build_query(remaining))
        return template

    uri = template
    seen = set()
    for match in PLACEHOLDER_PATTERN.findall(template):
        if match in seen:
            continue
        seen.add(match)
        name = match[1:-1]
        if remaining.get(name) is not None:
            uri = uri.replace(match, _stringify(remaining.pop(name)))

    if remaining:
        query = build_query(remaining)
        if query:
            separator = "&" if "?" in uri else "?"
            uri = f"{uri}{separator}{query}"

    return Uri(uri)
