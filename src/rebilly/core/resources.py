"""
In-memory representations of JSON documents returned by the API.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Type, TypeVar, Union

__all__ = [
    "Collection",
    "Entity",
    "Resource",
    "attribute",
    "embedded",
]

EMBEDDED_KEY = "_embedded"
LINKS_KEY = "_links"

E = TypeVar("E", bound="Entity")


class Resource:
    """
    Untyped wrapper over one decoded JSON object.

    This is also what the factory returns for paths it does not know.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        if data is not None and not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__} expects a mapping, got {type(data).__name__}")
        self._data: Dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def json_serialize(self) -> Dict[str, Any]:
        """Return the document as it should be sent back to the API."""
        return {
            key: copy.deepcopy(value)
            for key, value in self._data.items()
            if key not in (EMBEDDED_KEY, LINKS_KEY)
        }

    def get_link(self, rel: str) -> Optional[str]:
        """
        Return the ``href`` of the ``rel`` link, if any.

        Both the list form (``[{"rel": "self", "href": ...}]``) and the HAL
        dict form (``{"self": {"href": ...}}``) are understood.
        """
        links = self._data.get(LINKS_KEY)
        if isinstance(links, list):
            for link in links:
                if isinstance(link, Mapping) and link.get("rel") == rel:
                    return link.get("href")
        elif isinstance(links, Mapping):
            link = links.get(rel)
            if isinstance(link, Mapping):
                return link.get("href")
            if isinstance(link, str):
                return link
        return None


class Entity(Resource):
    """Base class for typed API objects."""

    @property
    def id(self) -> Optional[str]:
        return self._data.get("id")

    def get_attribute(self, name: str) -> Any:
        return self._data.get(name)

    def set_attribute(self: E, name: str, value: Any) -> E:
        self._data[name] = value
        return self

    def has_embedded_resource(self, name: str) -> bool:
        embedded_resources = self._data.get(EMBEDDED_KEY)
        return isinstance(embedded_resources, Mapping) and embedded_resources.get(name) is not None

    def get_embedded_resource(self, name: str) -> Optional[Any]:
        if not self.has_embedded_resource(name):
            return None
        return self._data[EMBEDDED_KEY][name]


class attribute:
    """
    Declares a typed accessor for one JSON field of an :class:`Entity`.

    ``writable=False`` makes assignment raise :class:`AttributeError`.
    """

    def __init__(self, name: str, *, writable: bool = True) -> None:
        self.name = name
        self.writable = writable
        self.attr_name = name

    def __set_name__(self, owner: type, attr_name: str) -> None:
        self.attr_name = attr_name

    def __get__(self, instance: Optional[Entity], owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.get_attribute(self.name)

    def __set__(self, instance: Entity, value: Any) -> None:
        if not self.writable:
            raise AttributeError(f"'{self.attr_name}' is read-only")
        instance.set_attribute(self.name, value)


class embedded(Generic[E]):
    """
    Declares an embedded resource, wrapped in ``resource_type`` on access.

    Nothing is built until the attribute is read; every read returns a fresh
    wrapper.
    """

    def __init__(self, name: str, resource_type: Type[E]) -> None:
        self.name = name
        self.resource_type = resource_type

    def __get__(self, instance: Optional[Entity], owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        data = instance.get_embedded_resource(self.name)
        if data is None:
            return None
        if isinstance(data, list):
            return [self._wrap(item) for item in data]
        return self._wrap(data)

    def _wrap(self, item: Any) -> Resource:
        if not isinstance(item, Mapping):
            return Resource({"value": item})
        return self.resource_type(item)


class Collection(Generic[E]):
    """
    One page of resources plus its pagination metadata.

    ``total``, ``offset`` and ``limit`` are ``None`` when the server did not
    report them.
    """

    def __init__(
        self,
        items: List[Union[E, Resource]],
        *,
        total: Optional[int] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> None:
        self.items = list(items)
        self.total = total
        self.offset = offset
        self.limit = limit

    def __iter__(self) -> Iterator[Union[E, Resource]]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Union[E, Resource]:
        return self.items[index]

    def __bool__(self) -> bool:
        return bool(self.items)

    def __repr__(self) -> str:
        return (
            f"Collection(items={len(self.items)}, total={self.total}, "
            f"offset={self.offset}, limit={self.limit})"
        )

    def to_list(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self.items]

    def json_serialize(self) -> List[Dict[str, Any]]:
        return [item.json_serialize() for item in self.items]
