"""
Resolution of decoded response bodies into typed resources.

A :class:`Schema` maps path templates such as ``bank-accounts/{id}`` to entity
types. The :class:`ResourceFactory` matches a response path against it and
wraps the body accordingly.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union

from .config import CURRENT_VERSION
from .resources import Collection, Entity, Resource
from .uri import PLACEHOLDER_PATTERN, Uri

__all__ = ["ResourceFactory", "Schema", "split_path"]

PAGINATION_HEADERS = {
    "total": "Pagination-Total",
    "offset": "Pagination-Offset",
    "limit": "Pagination-Limit",
}

_WILDCARD = None


def split_path(path: str, *, version: str = CURRENT_VERSION) -> List[str]:
    """
    Split ``path`` into segments without the API version prefix.

    Query strings and absolute URL prefixes are ignored.
    """
    path = Uri(path).path
    segments = [segment for segment in path.split("/") if segment]
    if segments and segments[0] == version:
        segments = segments[1:]
    return segments


class Schema:
    """Registry of path templates and the entity type each one yields."""

    def __init__(self, routes: Optional[Mapping[str, Type[Entity]]] = None) -> None:
        self._routes: List[Tuple[Tuple[Optional[str], ...], Type[Entity]]] = []
        for template, entity_type in (routes or {}).items():
            self.register(template, entity_type)

    def register(self, template: str, entity_type: Type[Entity]) -> None:
        pattern = tuple(
            _WILDCARD if PLACEHOLDER_PATTERN.fullmatch(segment) else segment
            for segment in split_path(template)
        )
        if not pattern:
            raise ValueError("Cannot register an empty path template")
        self._routes.append((pattern, entity_type))

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, segments: Iterable[str]) -> Optional[Type[Entity]]:
        """
        Return the entity type of the most specific matching template.

        Templates must have as many segments as the path; among those that
        match, the one with the most literal segments wins.
        """
        segments = tuple(segments)
        best: Optional[Type[Entity]] = None
        best_score = -1
        for pattern, entity_type in self._routes:
            if len(pattern) != len(segments):
                continue
            score = 0
            for expected, actual in zip(pattern, segments):
                if expected is _WILDCARD:
                    continue
                if expected != actual:
                    break
                score += 1
            else:
                if score > best_score:
                    best, best_score = entity_type, score
        return best


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ResourceFactory:
    """
    Builds resources from ``(path, body)`` pairs.

    Unknown paths fall back to :class:`Resource`; the factory never raises for
    an unexpected shape.
    """

    def __init__(self, schema: Optional[Schema] = None, *, version: str = CURRENT_VERSION) -> None:
        self.schema = schema if schema is not None else Schema()
        self.version = version

    def resolve_type(self, path: str) -> Optional[Type[Entity]]:
        return self.schema.match(split_path(path, version=self.version))

    def create(
        self,
        path: str,
        body: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Union[Resource, Collection]:
        entity_type = self.resolve_type(path or "")
        if entity_type is None:
            logging.debug("No resource type registered for path '%s'", path)

        if isinstance(body, list):
            metadata = self._header_metadata(headers)
            return self._collection(body, entity_type, **metadata)

        if isinstance(body, Mapping) and isinstance(body.get("items"), list):
            return self._collection(
                body["items"],
                entity_type,
                total=_to_int(body.get("total")),
                offset=_to_int(body.get("offset")),
                limit=_to_int(body.get("limit")),
            )

        if not isinstance(body, Mapping):
            body = {} if body is None else {"value": body}

        if entity_type is None:
            return Resource(body)
        return entity_type(body)

    def _collection(
        self,
        items: List[Any],
        entity_type: Optional[Type[Entity]],
        *,
        total: Optional[int] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Collection:
        return Collection(
            [self._item(item, entity_type) for item in items],
            total=total,
            offset=offset,
            limit=limit,
        )

    def _item(self, item: Any, default_type: Optional[Type[Entity]]) -> Resource:
        if not isinstance(item, Mapping):
            return Resource({"value": item})
        # An item's own self link is a better type hint than the collection path.
        self_link = Resource(item).get_link("self")
        item_type = self.resolve_type(self_link) if self_link else None
        item_type = item_type or default_type
        if item_type is None:
            return Resource(item)
        return item_type(item)

    @staticmethod
    def _header_metadata(headers: Optional[Mapping[str, str]]) -> Dict[str, Optional[int]]:
        if not headers:
            return {"total": None, "offset": None, "limit": None}
        return {
            key: _to_int(headers.get(header))
            for key, header in PAGINATION_HEADERS.items()
        }
