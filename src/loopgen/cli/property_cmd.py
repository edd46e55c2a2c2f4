"""loopgen property CLI command.

Asks which model to extend and what the new property looks like, then
stores the coerced definition through the JSON workspace. Model files
are edited in place by the store; this command writes nothing itself.
"""

from __future__ import annotations

import json
from typing import Optional

import typer

from loopgen.cli.output import debug_enabled, open_project, print_error, print_success
from loopgen.cli.prompts import Asker, Question, make_asker
from loopgen.errors import LoopgenError, PropertyValidationError
from loopgen.scaffold.property import PropertyAnswers, add_property
from loopgen.scaffold.validation import (
    OTHER_TYPE_CHOICE,
    TYPE_CHOICES,
    check_property_name,
    validate_required_name,
)
from loopgen.workspace.store import JsonWorkspace


def ask_property(asker: Asker, name: str | None = None) -> PropertyAnswers:
    """Run the property questions; skip the name prompt when name is given."""
    if not name:
        name = asker.ask(
            Question(
                name="name",
                message="Enter the property name",
                validate=check_property_name,
            )
        )

    prop_type = asker.ask(
        Question(name="type", message="Property type", kind="list", choices=TYPE_CHOICES)
    )

    custom_type = None
    if prop_type == OTHER_TYPE_CHOICE:
        custom_type = asker.ask(
            Question(
                name="customType",
                message="Enter the type",
                validate=validate_required_name,
            )
        )

    item_type = None
    custom_item_type = None
    if prop_type == "array":
        item_type = asker.ask(
            Question(
                name="itemType",
                message="The type of array items",
                kind="list",
                choices=[t for t in TYPE_CHOICES if t != "array"],
            )
        )
        if item_type == OTHER_TYPE_CHOICE:
            custom_item_type = asker.ask(
                Question(
                    name="customItemType",
                    message="Enter the item type",
                    validate=validate_required_name,
                )
            )

    required = asker.ask(
        Question(name="required", message="Required?", kind="confirm", default=False)
    )
    default_value = asker.ask(
        Question(name="defaultValue", message="Default value [leave blank for none]")
    )

    return PropertyAnswers(
        name=name,
        type=prop_type,
        custom_type=custom_type,
        item_type=item_type,
        custom_item_type=custom_item_type,
        required=bool(required),
        default_value=default_value or None,
    )


def property_cmd(
    model: Optional[str] = typer.Option(
        None, "--model", "-m", help="Model to add the property to"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Name of the new property"
    ),
    directory: str = typer.Option(
        ".", "--directory", "-C", help="Project directory"
    ),
) -> None:
    """Add a property to an existing model definition."""
    root, config = open_project(directory)
    store = JsonWorkspace(root, config)
    asker = make_asker()

    if not model:
        model_names = store.editable_model_names()
        if not model_names:
            print_error("No editable models found in this project.")
            raise typer.Exit(code=1)
        model = asker.ask(
            Question(name="model", message="Select the model", kind="list", choices=model_names)
        )

    try:
        model_file = store.get_model(model)
        answers = ask_property(asker, name)
        definition = add_property(store, model, answers, debug=debug_enabled(config))
    except PropertyValidationError as e:
        print_error(f"The `{e.model_name}` property definition is not valid.")
        for message in e.messages():
            print_error(message)
        raise typer.Exit(code=1)
    except (LoopgenError, json.JSONDecodeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    relative = model_file.path.relative_to(root).as_posix()
    print_success("update", f"{relative} ({definition.name})")
