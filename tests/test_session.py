import asyncio

import httpx
import pytest

from pokedex.api import PokeApiClient
from pokedex.errors import DetailFetchError
from pokedex.models import Found, ListEntry, MediaHandle, NotFound
from pokedex.prober import MediaProber
from pokedex.session import BrowserSession

DETAILS = {
    "u1": {"id": 1, "name": "bulbasaur", "types": [{"type": {"name": "grass"}}]},
    "u2": {"id": 2, "name": "ivysaur", "types": [{"type": {"name": "grass"}}]},
    "u3": {"id": 3, "name": "venusaur"},
}


class FakeApi:
    def __init__(self, entries=None, details=None, gated=False):
        self.entries = entries if entries is not None else [ListEntry(d["name"], u) for u, d in DETAILS.items()]
        self.details = details if details is not None else DETAILS
        self.gates = {url: asyncio.Event() for url in self.details} if gated else {}
        self.detail_calls = []

    async def fetch_list(self, limit, offset=0):
        return list(self.entries)

    async def get_details(self, url):
        self.detail_calls.append(url)
        if url in self.gates:
            await self.gates[url].wait()
        data = self.details.get(url)
        if data is None:
            raise DetailFetchError(url, 500, "Internal Server Error")
        return data


async def _no_audio(url):
    return None


def _session(api, attempt=_no_audio, **kwargs):
    return BrowserSession(api, MediaProber(attempt=attempt, timeout=1.0), **kwargs)


async def test_show_builds_view_and_moves_cursor():
    session = _session(FakeApi())
    await session.load(limit=10)
    view = await session.show(1)
    assert view.title == "Ivysaur"
    assert view.type_line == "Type: Grass"
    assert view.audio == NotFound(attempts=4)
    assert session.index == 1
    assert session.current is view


async def test_audio_found_on_first_candidate():
    async def attempt(url):
        return MediaHandle(url=url, content_type="audio/mpeg")

    session = _session(FakeApi(), attempt=attempt)
    await session.load(limit=10)
    view = await session.show(0)
    assert isinstance(view.audio, Found)
    assert view.audio_url == "https://play.pokemonshowdown.com/audio/cries/bulbasaur.mp3"


async def test_next_and_previous_clamp_to_bounds():
    session = _session(FakeApi())
    await session.load(limit=10)
    assert (await session.next()).title == "Bulbasaur"
    assert (await session.next()).title == "Ivysaur"
    assert (await session.next()).title == "Venusaur"
    assert (await session.next()).title == "Venusaur"
    assert session.index == 2
    assert (await session.previous()).title == "Ivysaur"
    await session.previous()
    assert (await session.previous()).title == "Bulbasaur"
    assert session.index == 0


async def test_navigation_on_empty_list_does_nothing():
    session = _session(FakeApi(entries=[]))
    await session.load(limit=10)
    assert await session.next() is None
    assert await session.previous() is None
    assert session.generation == 0


async def test_show_out_of_range():
    session = _session(FakeApi())
    await session.load(limit=10)
    with pytest.raises(IndexError):
        await session.show(3)


async def test_detail_failure_keeps_last_good_view():
    entries = [ListEntry("bulbasaur", "u1"), ListEntry("missingno", "bad")]
    session = _session(FakeApi(entries=entries))
    await session.load(limit=10)
    good = await session.show(0)
    assert await session.show(1) is None
    assert session.current is good


async def test_stale_result_does_not_overwrite_newer_view():
    api = FakeApi(gated=True)
    session = _session(api)
    await session.load(limit=10)

    slow = asyncio.create_task(session.show(0))
    fast = asyncio.create_task(session.show(1))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert api.detail_calls == ["u1", "u2"]

    api.gates["u2"].set()
    newer = await fast
    api.gates["u1"].set()
    stale = await slow

    assert stale is None
    assert newer.title == "Ivysaur"
    assert session.current is newer
    assert session.generation == 2


async def test_stale_audio_is_discarded():
    release = asyncio.Event()

    async def attempt(url):
        if "bulbasaur" in url:
            await release.wait()
        return None

    session = _session(FakeApi(), attempt=attempt)
    await session.load(limit=10)
    first = asyncio.create_task(session.show(0))
    await asyncio.sleep(0.01)
    second = await session.show(1)
    release.set()
    assert await first is None
    assert session.current is second


async def test_audio_errors_never_break_detail_rendering(monkeypatch):
    import pokedex.session as session_module

    def explode(*args, **kwargs):
        raise RuntimeError("candidate generation failed")

    monkeypatch.setattr(session_module, "generate_candidates", explode)
    session = _session(FakeApi())
    await session.load(limit=10)
    view = await session.show(0)
    assert view.title == "Bulbasaur"
    assert view.audio == NotFound()


async def test_pagination():
    entries = [ListEntry(f"p{i}", f"u{i}") for i in range(45)]
    session = _session(FakeApi(entries=entries), page_size=20)
    await session.load(limit=100)
    assert session.page_count == 3
    assert [e.name for e in session.page(1)][:2] == ["p0", "p1"]
    assert len(session.page(3)) == 5
    assert session.page(4) == []
    assert session.page(0) == []


async def test_details_are_requested_once_per_url_across_views():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        if request.url.path == "/api/v2/pokemon":
            return httpx.Response(
                200, json={"results": [{"name": "bulbasaur", "url": "https://pokeapi.test/api/v2/pokemon/1/"}]}
            )
        return httpx.Response(200, json={"id": 1, "name": "bulbasaur"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        api = PokeApiClient(client, base_url="https://pokeapi.test/api/v2")
        session = _session(api)
        await session.load(limit=1)
        await session.show(0)
        await session.show(0)

    assert calls.count("/api/v2/pokemon/1/") == 1
