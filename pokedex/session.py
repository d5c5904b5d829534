from __future__ import annotations

import logging
import math

from pokedex.api import PokeApiClient
from pokedex.candidates import generate_candidates
from pokedex.config import DEFAULT_LIST_LIMIT, DEFAULT_PAGE_SIZE
from pokedex.errors import DetailFetchError
from pokedex.models import ListEntry, NotFound, PokemonDetail, ProbeResult
from pokedex.prober import MediaProber
from pokedex.render import DetailView, build_view

logger = logging.getLogger(__name__)


class BrowserSession:
    """View state for one browsing session.

    Every ``show`` starts a new generation. A result is applied to
    ``current`` only if its generation is still the latest when it
    arrives, so a slow stale request can never overwrite a newer view.
    """

    def __init__(
        self,
        api: PokeApiClient,
        prober: MediaProber,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        image_without_id: bool = False,
    ) -> None:
        self.api = api
        self.prober = prober
        self.page_size = max(1, page_size)
        self.image_without_id = image_without_id

        self.entries: list[ListEntry] = []
        self.index: int | None = None
        self.generation = 0
        self.current: DetailView | None = None

    async def load(self, limit: int = DEFAULT_LIST_LIMIT, offset: int = 0) -> list[ListEntry]:
        # ListFetchError is fatal for the session and propagates.
        self.entries = await self.api.fetch_list(limit=limit, offset=offset)
        self.index = None
        return self.entries

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.entries) / self.page_size)

    def page(self, number: int) -> list[ListEntry]:
        """Entries on 1-based page ``number``; empty when out of range."""
        if number < 1:
            return []
        start = (number - 1) * self.page_size
        return self.entries[start : start + self.page_size]

    async def show(self, index: int) -> DetailView | None:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"no entry at position {index + 1}")

        self.generation += 1
        generation = self.generation
        self.index = index
        entry = self.entries[index]

        try:
            data = await self.api.get_details(entry.url)
        except DetailFetchError as exc:
            logger.error("detail fetch failed name=%s: %s", entry.name, exc)
            return None

        if generation != self.generation:
            logger.debug("discarding stale detail name=%s generation=%d", entry.name, generation)
            return None

        detail = PokemonDetail.from_json(data)
        audio = await self._resolve_audio(detail)

        if generation != self.generation:
            logger.debug("discarding stale audio name=%s generation=%d", entry.name, generation)
            return None

        self.current = build_view(detail, audio)
        return self.current

    async def next(self) -> DetailView | None:
        if not self.entries:
            return None
        target = 0 if self.index is None else min(self.index + 1, len(self.entries) - 1)
        return await self.show(target)

    async def previous(self) -> DetailView | None:
        if not self.entries:
            return None
        target = 0 if self.index is None else max(self.index - 1, 0)
        return await self.show(target)

    async def _resolve_audio(self, detail: PokemonDetail) -> ProbeResult:
        # Media problems must never break the textual detail view.
        try:
            urls = generate_candidates(detail.id, detail.name, image_without_id=self.image_without_id)
            return await self.prober.probe(urls)
        except Exception as exc:  # noqa: BLE001
            logger.debug("audio load failed name=%s: %s", detail.name, exc)
            return NotFound()
