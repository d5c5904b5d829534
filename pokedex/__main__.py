from pokedex.cli import app

app(prog_name="pokedex")
