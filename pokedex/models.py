from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(slots=True, frozen=True)
class ListEntry:
    name: str
    url: str


@dataclass(slots=True, frozen=True)
class MediaHandle:
    url: str
    content_type: str
    content_length: int | None = None


@dataclass(slots=True, frozen=True)
class Found:
    url: str
    handle: MediaHandle


@dataclass(slots=True, frozen=True)
class NotFound:
    attempts: int = 0


ProbeResult = Union[Found, NotFound]


@dataclass(slots=True, frozen=True)
class Ability:
    name: str
    is_hidden: bool = False


@dataclass(slots=True, frozen=True)
class Stat:
    name: str
    base: int


@dataclass(slots=True)
class PokemonDetail:
    id: int | None
    name: str
    artwork: str | None = None
    types: list[str] | None = None
    height: int | None = None
    weight: int | None = None
    abilities: list[Ability] = field(default_factory=list)
    stats: list[Stat] = field(default_factory=list)
    moves: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "PokemonDetail":
        sprites = data.get("sprites") or {}
        artwork = (
            ((sprites.get("other") or {}).get("official-artwork") or {}).get("front_default")
            or sprites.get("front_default")
            or None
        )

        raw_types = data.get("types")
        types = None
        if isinstance(raw_types, list):
            types = [t["type"]["name"] for t in raw_types if (t.get("type") or {}).get("name")]

        abilities = [
            Ability(name=a["ability"]["name"], is_hidden=bool(a.get("is_hidden")))
            for a in data.get("abilities") or []
            if (a.get("ability") or {}).get("name")
        ]
        stats = [
            Stat(name=s["stat"]["name"], base=int(s.get("base_stat") or 0))
            for s in data.get("stats") or []
            if (s.get("stat") or {}).get("name")
        ]
        moves = [m["move"]["name"] for m in data.get("moves") or [] if (m.get("move") or {}).get("name")]

        return cls(
            id=data.get("id"),
            name=str(data.get("name") or ""),
            artwork=artwork,
            types=types,
            height=data.get("height"),
            weight=data.get("weight"),
            abilities=abilities,
            stats=stats,
            moves=moves,
        )
