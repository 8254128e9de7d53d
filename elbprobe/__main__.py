from elbprobe.cli import app

app(prog_name="elbprobe")
