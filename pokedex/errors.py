from __future__ import annotations


class PokedexError(Exception):
    pass


class FetchError(PokedexError):
    """Non-success HTTP status or transport failure for a single request."""

    def __init__(self, url: str, status_code: int | None, reason: str) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        status = status_code if status_code is not None else "network"
        super().__init__(f"API error: {status} {reason}".rstrip())


class ListFetchError(FetchError):
    pass


class DetailFetchError(FetchError):
    pass
