"""CLI entrypoint: Typer app definition and command registration"""

import typer

from qvmd.cli.commands import export_cmd


app = typer.Typer(name="qvmd", add_completion=False, help="Quiver library to Markdown exporter")

app.command(name="export")(export_cmd)


if __name__ == "__main__":
    app()
