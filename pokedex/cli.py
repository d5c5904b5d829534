from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

from pokedex.candidates import generate_candidates
from pokedex.config import AppConfig
from pokedex.runner import EXIT_ERROR, EXIT_OK, browse, list_page, run_sync, show

app = typer.Typer(add_completion=False, help="Browse Pokémon from PokeAPI and find their cries")


def _load_config() -> AppConfig:
    load_dotenv()
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return config


@app.command("list")
def list_command(
    page: int = typer.Option(1, "--page", "-p", min=1, help="1-based page number"),
) -> None:
    config = _load_config()
    raise typer.Exit(code=run_sync(list_page(config, page)))


@app.command("show")
def show_command(
    target: str = typer.Argument(..., help="Pokémon name or 1-based position in the list"),
) -> None:
    config = _load_config()
    raise typer.Exit(code=run_sync(show(config, target)))


@app.command("browse")
def browse_command(
    start: int = typer.Option(1, "--start", min=1, help="1-based position of the first entry"),
    count: int = typer.Option(1, "--count", min=1, help="How many entries to step through"),
) -> None:
    config = _load_config()
    raise typer.Exit(code=run_sync(browse(config, start=start, count=count)))


@app.command("candidates")
def candidates_command(
    name: str = typer.Argument(..., help="Pokémon name"),
    pokemon_id: Optional[int] = typer.Option(None, "--id", help="National dex number"),
    image_without_id: Optional[bool] = typer.Option(
        None,
        "--image-without-id/--no-image-without-id",
        help="Keep the sprite URL even when no id is given",
    ),
) -> None:
    config = _load_config()
    keep_image = config.image_without_id if image_without_id is None else image_without_id
    urls = generate_candidates(pokemon_id, name, image_without_id=keep_image)
    if not urls:
        raise typer.Exit(code=EXIT_ERROR)
    for url in urls:
        typer.echo(url)
    raise typer.Exit(code=EXIT_OK)


if __name__ == "__main__":
    app()
