# breadmaster_backend/app/services/storage/remote.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .base import RemoteStorageError, StorageBackend, StorageConfig, StorageProvider

DEFAULT_REMOTE_URL = "http://127.0.0.1:8000/api/storage"

# Purpose:
# Item store over HTTP:
#   GET    {base}/items/{key}          -> 200 {"value": ...} | 404 when absent
#   PUT    {base}/items/{key}          <- {"value": ...}
#   DELETE {base}/items/{key}
#   DELETE {base}/items?prefix=<p>     (prefix clear) | DELETE {base}/items (everything)
# Writes raise RemoteStorageError on any failure; reads fall back to the default.


class RemoteStorageProvider(StorageProvider):
    kind = StorageBackend.REMOTE

    def __init__(
        self,
        config: StorageConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(config, logger)
        self.base_url = (config.remote_url or DEFAULT_REMOTE_URL).rstrip("/")
        self.api_key = config.api_key
        self._transport = transport   # tests plug an ASGI app in here

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _item_path(self, key: str) -> str:
        return f"/items/{quote(self._key(key), safe='')}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, headers=self._headers(), transport=self._transport
            ) as client:
                resp = await client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            self.log.error("API request error: %s %s (%s)", method, path, e)
            raise RemoteStorageError(f"{method} {path} failed: {e}") from e
        if resp.status_code >= 400:
            raise RemoteStorageError(
                f"API error: {resp.status_code} {resp.reason_phrase} for {method} {path}",
                status_code=resp.status_code,
            )
        return resp

    async def get_item(self, key: str, default: Any = None) -> Any:
        try:
            resp = await self._request("GET", self._item_path(key))
            body = resp.json()
        except RemoteStorageError as e:
            if e.status_code != 404:
                self.log.error("Error fetching item from API: %s (%s)", key, e)
            return default
        except ValueError as e:
            self.log.error("Error parsing item from API: %s (%s)", key, e)
            return default
        if not isinstance(body, dict) or "value" not in body:
            self.log.error("Malformed item body from API for %s", key)
            return default
        return body["value"]

    async def set_item(self, key: str, value: Any) -> None:
        try:
            await self._request("PUT", self._item_path(key), json={"value": value})
        except TypeError as e:
            raise RemoteStorageError(f"value for {key} is not JSON-serializable: {e}") from e

    async def remove_item(self, key: str) -> None:
        await self._request("DELETE", self._item_path(key))

    async def clear(self, clear_all: bool = False) -> None:
        if clear_all:
            await self._request("DELETE", "/items")
        else:
            await self._request("DELETE", "/items", params={"prefix": self.prefix})
