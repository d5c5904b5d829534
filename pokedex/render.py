from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from pokedex.models import Ability, Found, ListEntry, NotFound, PokemonDetail, ProbeResult, Stat

NO_AUDIO_TEXT = "No audio available"


def capitalize(value: object) -> str:
    # Only the first letter changes; "mr-mime" -> "Mr-mime".
    text = str(value)
    return text[:1].upper() + text[1:]


@dataclass(slots=True)
class DetailView:
    title: str
    pokemon_id: int | None = None
    type_line: str | None = None
    image_src: str | None = None
    height: int | None = None
    weight: int | None = None
    abilities: list[Ability] = field(default_factory=list)
    stats: list[Stat] = field(default_factory=list)
    moves: list[str] = field(default_factory=list)
    audio: ProbeResult = field(default_factory=NotFound)

    @property
    def audio_url(self) -> str | None:
        return self.audio.url if isinstance(self.audio, Found) else None


def build_view(detail: PokemonDetail, audio: ProbeResult | None = None) -> DetailView:
    type_line = None
    if detail.types is not None:
        type_line = "Type: " + ", ".join(capitalize(t) for t in detail.types)

    return DetailView(
        title=capitalize(detail.name),
        pokemon_id=detail.id,
        type_line=type_line,
        image_src=detail.artwork,
        height=detail.height,
        weight=detail.weight,
        abilities=list(detail.abilities),
        stats=list(detail.stats),
        moves=list(detail.moves),
        audio=audio if audio is not None else NotFound(),
    )


def render_view(view: DetailView, *, max_moves: int = 10) -> list[str]:
    heading = view.title
    if view.pokemon_id is not None:
        heading = f"{view.title} (#{view.pokemon_id})"
    lines = [heading]

    if view.type_line:
        lines.append(view.type_line)
    if view.image_src:
        lines.append(f"Image: {view.image_src}")
    if view.height is not None or view.weight is not None:
        lines.append(f"Height: {_or_dash(view.height)}  Weight: {_or_dash(view.weight)}")
    if view.abilities:
        names = [capitalize(a.name) + (" (hidden)" if a.is_hidden else "") for a in view.abilities]
        lines.append("Abilities: " + ", ".join(names))
    if view.stats:
        lines.append("Stats:")
        for stat in view.stats:
            lines.append(f"  {stat.name}: {stat.base}")
    if view.moves:
        shown = view.moves[: max(0, max_moves)]
        more = len(view.moves) - len(shown)
        text = ", ".join(shown) + (f" (+{more} more)" if more > 0 else "")
        lines.append(f"Moves: {text}")

    lines.append(f"Audio: {view.audio_url or NO_AUDIO_TEXT}")
    return lines


def render_list(entries: Iterable[ListEntry], *, start: int = 0) -> list[str]:
    return [f"{start + i + 1}. {entry.name}" for i, entry in enumerate(entries)]


def render_error(message: str) -> str:
    return f"Error: {message}"


def _or_dash(value: int | None) -> str:
    return "-" if value is None else str(value)
