from __future__ import annotations

import re
from typing import Any

SHOWDOWN_CRY_URL = "https://play.pokemonshowdown.com/audio/cries/{name}.mp3"
BULBAGARDEN_CRY_URL = "https://archives.bulbagarden.net/media/sound/ogg/vg/cries/{id}.ogg"
POKEMONCRIES_URL = "https://pokemoncries.com/cries/{id}.mp3"
POKESPRITE_IMAGE_URL = (
    "https://raw.githubusercontent.com/msikma/pokesprite/master/sprites/pokemon/384x384/{id}.png"
)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-z0-9-]")


def normalize_name(name: Any) -> str:
    text = "" if name is None else str(name)
    return _UNSAFE_NAME_CHARS.sub("-", text.lower())


def is_valid_id(value: Any) -> bool:
    # bool is an int subclass but never a dex number
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def generate_candidates(pokemon_id: Any, name: Any, *, image_without_id: bool = False) -> tuple[str, ...]:
    """Ordered, deduplicated media URLs worth probing for one Pokémon.

    The name-keyed cry is always first. Id-keyed templates need a
    non-negative integer id; the sprite template ignores that guard only
    when ``image_without_id`` is set.
    """
    has_id = is_valid_id(pokemon_id)

    urls = [SHOWDOWN_CRY_URL.format(name=normalize_name(name))]
    if has_id:
        urls.append(BULBAGARDEN_CRY_URL.format(id=pokemon_id))
        urls.append(POKEMONCRIES_URL.format(id=pokemon_id))
    if has_id or image_without_id:
        urls.append(POKESPRITE_IMAGE_URL.format(id=pokemon_id))

    return tuple(dict.fromkeys(urls))
