from __future__ import annotations

from typing import Any

import httpx

from pokedex.errors import FetchError

DEFAULT_HEADERS = {
    "User-Agent": "pokedex-cli/0.1 (+https://pokeapi.co)",
    "Accept": "application/json",
}


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    error_cls: type[FetchError] = FetchError,
    **kwargs: Any,
) -> Any:
    """Single GET returning parsed JSON.

    No retries. Transport errors and non-2xx responses are raised as
    ``error_cls``; the status code is ``None`` when no response arrived.
    """
    try:
        response = await client.get(url, **kwargs)
    except httpx.HTTPError as exc:
        raise error_cls(url, None, f"{type(exc).__name__}: {exc}") from exc

    if not response.is_success:
        raise error_cls(url, response.status_code, response.reason_phrase)

    try:
        return response.json()
    except ValueError as exc:
        raise error_cls(url, response.status_code, f"invalid JSON: {exc}") from exc
