"""loopgen boot-script CLI command.

Asks for a script name and template type, then copies the template
to server/boot/<name>.js.
"""

from __future__ import annotations

from typing import Optional

import typer

from loopgen.cli.output import open_project, print_error
from loopgen.cli.prompts import Asker, Question, make_asker
from loopgen.errors import InvalidNameError, ScriptExistsError
from loopgen.scaffold.boot_script import BOOT_SCRIPT_TYPES, generate_boot_script
from loopgen.scaffold.validation import validate_required_name


def ask_boot_script(
    asker: Asker,
    name: str | None,
    script_type: str | None,
    default_type: str = "async",
) -> tuple[str, str]:
    """Fill in whichever of name and script_type were not given."""
    if not name:
        name = asker.ask(
            Question(
                name="name",
                message="Enter the script name (without `.js`)",
                validate=validate_required_name,
            )
        )
    if script_type is None:
        script_type = asker.ask(
            Question(
                name="type",
                message="What type of boot script do you want to generate?",
                kind="list",
                choices=list(BOOT_SCRIPT_TYPES),
                default=default_type,
            )
        )
    return name, script_type


def boot_script(
    name: Optional[str] = typer.Argument(
        None, help="Name of the boot script to create."
    ),
    script_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Template to use: async or sync"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing script"
    ),
    directory: str = typer.Option(
        ".", "--directory", "-C", help="Project directory"
    ),
) -> None:
    """Generate a boot script in server/boot/."""
    root, config = open_project(directory)
    name, script_type = ask_boot_script(
        make_asker(), name, script_type, default_type=config.default_boot_type
    )

    try:
        generate_boot_script(
            root, name, script_type, force=force, boot_dir=config.boot_dir
        )
    except ScriptExistsError as e:
        print_error(str(e))
        typer.echo("Use --force to overwrite existing files.", err=True)
        raise typer.Exit(code=1)
    except (InvalidNameError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)
