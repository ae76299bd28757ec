from panda.cli import app

app(prog_name="panda")
