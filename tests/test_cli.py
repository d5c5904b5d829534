from typer.testing import CliRunner

from pokedex.cli import app

runner = CliRunner()


def test_candidates_command(monkeypatch):
    monkeypatch.delenv("POKEDEX_IMAGE_WITHOUT_ID", raising=False)
    result = runner.invoke(app, ["candidates", "Mr. Mime", "--id", "122"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "https://play.pokemonshowdown.com/audio/cries/mr--mime.mp3"
    assert len(lines) == 4


def test_candidates_without_id(monkeypatch):
    monkeypatch.delenv("POKEDEX_IMAGE_WITHOUT_ID", raising=False)
    result = runner.invoke(app, ["candidates", "ditto"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["https://play.pokemonshowdown.com/audio/cries/ditto.mp3"]

    result = runner.invoke(app, ["candidates", "ditto", "--image-without-id"])
    assert result.output.splitlines()[-1].endswith("/384x384/None.png")
