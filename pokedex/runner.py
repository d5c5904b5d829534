from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Coroutine

import httpx

from pokedex.api import PokeApiClient, find_entry
from pokedex.config import AppConfig
from pokedex.errors import ListFetchError
from pokedex.http_utils import DEFAULT_HEADERS
from pokedex.jsonl_logger import JsonlLogger
from pokedex.prober import MediaProber
from pokedex.render import DetailView, render_error, render_list, render_view
from pokedex.session import BrowserSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DEGRADED = 1
EXIT_ERROR = 2


@dataclass
class BrowseReport:
    requested: int = 0
    views: list[DetailView] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.requested - len(self.views)

    @property
    def with_audio(self) -> int:
        return sum(1 for view in self.views if view.audio_url)


@asynccontextmanager
async def open_session(
    config: AppConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[BrowserSession]:
    failed_logger = JsonlLogger(config.probe_log_path) if config.probe_log_path else None
    async with httpx.AsyncClient(
        timeout=config.http_timeout,
        headers=DEFAULT_HEADERS,
        transport=transport,
    ) as client:
        api = PokeApiClient(client, base_url=config.api_base_url)
        prober = MediaProber(client, timeout=config.probe_timeout, failed_logger=failed_logger)
        yield BrowserSession(
            api,
            prober,
            page_size=config.page_size,
            image_without_id=config.image_without_id,
        )


def _print_view(view: DetailView, config: AppConfig) -> None:
    print("\n".join(render_view(view, max_moves=config.max_moves)))


def evaluate_exit_code(report: BrowseReport) -> int:
    """Exit code policy.

    - EXIT_OK: at least one detail view was rendered.
    - EXIT_DEGRADED: the list loaded but every requested detail failed
      (or nothing was requested).
    """
    if report.views:
        return EXIT_OK
    return EXIT_DEGRADED


async def browse(
    config: AppConfig,
    *,
    start: int = 1,
    count: int = 1,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with open_session(config, transport) as session:
        try:
            await session.load(limit=config.list_limit)
        except ListFetchError as exc:
            print(render_error(str(exc)))
            return EXIT_ERROR

        report = BrowseReport()
        if not session.entries:
            print("[Pokedex] The list endpoint returned no entries.")
            return evaluate_exit_code(report)

        first = min(max(start, 1), len(session.entries)) - 1
        last = min(first + max(count, 0), len(session.entries))
        for index in range(first, last):
            report.requested += 1
            view = await session.show(index)
            if view is None:
                print(f"[Pokedex] Could not load {session.entries[index].name}.")
                continue
            report.views.append(view)
            _print_view(view, config)
            print()

        print(
            f"[Pokedex] shown={len(report.views)} failed={report.failed} with_audio={report.with_audio}"
        )
        return evaluate_exit_code(report)


async def show(
    config: AppConfig,
    target: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with open_session(config, transport) as session:
        try:
            await session.load(limit=config.list_limit)
        except ListFetchError as exc:
            print(render_error(str(exc)))
            return EXIT_ERROR

        index = find_entry(session.entries, target)
        if index is None:
            print(render_error(f"no Pokémon named or numbered {target!r}"))
            return EXIT_ERROR

        view = await session.show(index)
        if view is None:
            print(f"[Pokedex] Could not load {session.entries[index].name}.")
            return EXIT_DEGRADED
        _print_view(view, config)
        return EXIT_OK


async def list_page(
    config: AppConfig,
    page: int = 1,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with open_session(config, transport) as session:
        try:
            await session.load(limit=config.list_limit)
        except ListFetchError as exc:
            print(render_error(str(exc)))
            return EXIT_ERROR

        entries = session.page(page)
        if not entries:
            print(f"[Pokedex] Page {page} is empty (pages: {session.page_count}).")
            return EXIT_DEGRADED

        start = (page - 1) * session.page_size
        print("\n".join(render_list(entries, start=start)))
        print(f"[Pokedex] page {page}/{session.page_count}")
        return EXIT_OK


def run_sync(job: Coroutine[Any, Any, int]) -> int:
    try:
        return asyncio.run(job)
    except Exception as exc:  # noqa: BLE001
        logger.exception("run failed")
        print(f"[Pokedex] Fatal error: {type(exc).__name__}: {exc}")
        return EXIT_ERROR
