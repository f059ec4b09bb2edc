"""
Offset/limit iteration over collection endpoints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional

from .resources import Collection, Resource

if TYPE_CHECKING:
    from .client import Client

__all__ = ["DEFAULT_LIMIT", "Paginator"]

DEFAULT_LIMIT = 100


class Paginator:
    """
    Iterates the pages of a collection endpoint.

    Each iteration step issues one ``GET`` with the current ``limit`` and
    ``offset``. Iteration stops once the reported total is reached or a page
    comes back shorter than ``limit``.
    """

    def __init__(
        self,
        client: "Client",
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.client = client
        self.path = path
        self.params: Dict[str, Any] = dict(params or {})
        self.limit = int(self.params.pop("limit", DEFAULT_LIMIT))
        self.offset = int(self.params.pop("offset", 0))
        if self.limit <= 0:
            raise ValueError("limit must be greater than zero")

    def __iter__(self) -> Iterator[Collection]:
        offset = self.offset
        while True:
            page = self.client.get(
                self.path,
                {**self.params, "limit": self.limit, "offset": offset},
            )
            if not isinstance(page, Collection):
                raise TypeError(
                    f"Expected a collection from '{self.path}', got {type(page).__name__}"
                )
            yield page

            if not page.items:
                return
            offset += len(page.items)
            if page.total is not None:
                if offset >= page.total:
                    return
            elif len(page.items) < self.limit:
                return

    def items(self) -> Iterator[Resource]:
        """Yield every resource across all pages."""
        for page in self:
            yield from page
