from __future__ import annotations

import logging
from typing import Any

import httpx

from pokedex.config import DEFAULT_API_BASE_URL, DEFAULT_LIST_LIMIT
from pokedex.errors import DetailFetchError, ListFetchError
from pokedex.http_utils import get_json
from pokedex.models import ListEntry

logger = logging.getLogger(__name__)


class DetailsCache:
    """URL -> detail record. Grows only; an entry is never replaced."""

    def __init__(self) -> None:
        self._items: dict[str, dict[str, Any]] = {}

    def __contains__(self, url: str) -> bool:
        return url in self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self, url: str) -> dict[str, Any] | None:
        return self._items.get(url)

    def add(self, url: str, record: dict[str, Any]) -> dict[str, Any]:
        return self._items.setdefault(url, record)


class PokeApiClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        cache: DetailsCache | None = None,
    ) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else DetailsCache()

    async def fetch_list(self, limit: int = DEFAULT_LIST_LIMIT, offset: int = 0) -> list[ListEntry]:
        url = f"{self.base_url}/pokemon"
        data = await get_json(
            self.client,
            url,
            params={"limit": limit, "offset": offset},
            error_cls=ListFetchError,
        )
        if not isinstance(data, dict):
            raise ListFetchError(url, None, "unexpected payload")

        entries: list[ListEntry] = []
        for item in data.get("results") or []:
            name = item.get("name")
            item_url = item.get("url")
            if isinstance(name, str) and isinstance(item_url, str) and item_url:
                entries.append(ListEntry(name=name, url=item_url))
        logger.info("fetched %d list entries", len(entries))
        return entries

    async def get_details(self, url: str) -> dict[str, Any]:
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        data = await get_json(self.client, url, error_cls=DetailFetchError)
        if not isinstance(data, dict):
            raise DetailFetchError(url, None, "unexpected payload")
        return self.cache.add(url, data)


def find_entry(entries: list[ListEntry], target: str) -> int | None:
    """Index of ``target`` given as a name or a 1-based position."""
    target = target.strip()
    if target.isdigit():
        position = int(target)
        if 1 <= position <= len(entries):
            return position - 1
        return None

    wanted = target.lower()
    for i, entry in enumerate(entries):
        if entry.name.lower() == wanted:
            return i
    return None
