"""Webflow CMS data API provider."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from mapsync.contracts.exceptions import AuthenticationError, ProviderError
from mapsync.contracts.item import Collection, CollectionItem
from mapsync.contracts.provider import CollectionProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.webflow.com/v2"


def _item_body(fields: dict[str, Any]) -> dict[str, Any]:
    return {"isDraft": False, "isArchived": False, "fieldData": fields}


class WebflowProvider(CollectionProvider):
    """Talks to the Webflow v2 collections API over :mod:`httpx`.

    Failures are never retried: any non-2xx response or transport error
    raises :class:`ProviderError` carrying the response body when there is
    one.
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> WebflowProvider:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._token}", "Accept": "application/json"},
            timeout=httpx.Timeout(30.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_collection(self, collection_id: str) -> Collection:
        payload = await self._request("GET", f"/collections/{collection_id}")
        return Collection.model_validate(payload)

    async def list_items(self, collection_id: str, *, limit: int, offset: int) -> list[CollectionItem]:
        payload = await self._request(
            "GET",
            f"/collections/{collection_id}/items",
            params={"limit": limit, "offset": offset},
        )
        return [CollectionItem.model_validate(item) for item in payload.get("items") or []]

    async def create_item(self, collection_id: str, fields: dict[str, Any]) -> CollectionItem:
        payload = await self._request("POST", f"/collections/{collection_id}/items", json=_item_body(fields))
        return CollectionItem.model_validate(payload)

    async def update_item(self, collection_id: str, item_id: str, fields: dict[str, Any]) -> CollectionItem:
        body = {"id": item_id, **_item_body(fields)}
        payload = await self._request("PATCH", f"/collections/{collection_id}/items/{item_id}", json=body)
        return CollectionItem.model_validate(payload)

    async def delete_item(self, collection_id: str, item_id: str) -> None:
        await self._request("DELETE", f"/collections/{collection_id}/items/{item_id}")

    async def publish_items(self, collection_id: str, item_ids: list[str]) -> None:
        await self._request("POST", f"/collections/{collection_id}/items/publish", json={"itemIds": item_ids})

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        if self._client is None:
            raise ProviderError("Provider is not initialized. Use 'async with'.")
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as exc:
            raise ProviderError(f"{method} {path} failed: {exc}") from exc

        if response.is_success:
            if not response.content:
                return {}
            payload: dict[str, Any] = response.json()
            return payload

        body = self._error_body(response)
        message = f"{method} {path} returned HTTP {response.status_code}"
        if response.status_code in {401, 403}:
            raise AuthenticationError(message, status_code=response.status_code, body=body)
        raise ProviderError(message, status_code=response.status_code, body=body)

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None
