"""Paginación de colecciones.

La API pagina con cabeceras `Link: <...>; rel="next"` y publica el total en
`X-Records`; httpx ya parsea `Link` en `response.links`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Iterator, TypeVar

from recurly_v2.adapters.http_client import ApiClient

if TYPE_CHECKING:
    from recurly_v2.resources.base import Resource

R = TypeVar("R", bound="Resource")


class Pager(Generic[R]):
    """Iterador perezoso sobre un endpoint de colección."""

    def __init__(
        self,
        resource_class: type[R],
        path: str,
        params: dict[str, Any] | None = None,
        client: ApiClient | None = None,
    ) -> None:
        self.resource_class = resource_class
        self.path = path
        self.params = dict(params or {})
        self._client = client

    @property
    def client(self) -> ApiClient:
        return self._client or ApiClient()

    def pages(self) -> Iterator[list[R]]:
        api = self.client
        url: str | None = self.path
        params = self.params
        while url:
            response = api.get(url, **params)
            yield self._records(api, response)
            url = response.links.get("next", {}).get("url")
            # La URL de `next` ya trae cursor y filtros.
            params = {}

    def __iter__(self) -> Iterator[R]:
        for page in self.pages():
            yield from page

    def count(self) -> int:
        response = self.client.head(self.path, **self.params)
        return int(response.headers.get("x-records", 0))

    def first(self) -> R | None:
        api = self.client
        response = api.get(self.path, **{**self.params, "per_page": 1})
        records = self._records(api, response)
        return records[0] if records else None

    def _records(self, api: ApiClient, response: Any) -> list[R]:
        _, value = api.decode(response)
        if value is None:
            return []
        items = value if isinstance(value, list) else [value]
        return [self.resource_class.from_payload(item, client=api) for item in items if isinstance(item, dict)]
