"""loopgen CLI entry point."""

import typer

from loopgen import __version__
from loopgen.cli.boot_script_cmd import boot_script
from loopgen.cli.property_cmd import property_cmd

app = typer.Typer(
    name="loopgen",
    help="Code generators for LoopBack-style projects",
    no_args_is_help=True,
)

# Register subcommands
app.command(name="boot-script")(boot_script)
app.command(name="property")(property_cmd)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"loopgen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Code generators for LoopBack-style projects."""
