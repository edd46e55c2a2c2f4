"""Property generation for `loopgen property`.

Builds a PropertyDefinition from prompt answers, coerces the default
value and hands the result to the model store. This module does not
write model files itself; the store owns the on-disk format.
"""

from __future__ import annotations

import json

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from loopgen.errors import InvalidNameError
from loopgen.models.property import PropertyDefinition
from loopgen.scaffold.coerce import coerce_default
from loopgen.scaffold.validation import (
    OTHER_TYPE_CHOICE,
    check_property_name,
    validate_required_name,
)
from loopgen.workspace.store import ModelStore

console = Console()


class PropertyAnswers(BaseModel):
    """Answers collected by the property prompts."""

    model_config = {"extra": "forbid"}

    name: str
    type: str
    custom_type: str | None = None
    item_type: str | None = None
    custom_item_type: str | None = None
    required: bool = False
    default_value: str | None = None


def _resolve_type(answers: PropertyAnswers) -> str | list[str]:
    if answers.type == "array":
        item_type = answers.item_type
        if item_type == OTHER_TYPE_CHOICE:
            item_type = answers.custom_item_type
        return [item_type] if item_type else "array"
    if answers.type == OTHER_TYPE_CHOICE:
        problem = validate_required_name(answers.custom_type)
        if problem is not None:
            raise InvalidNameError(problem)
        return answers.custom_type
    return answers.type


def build_property_definition(answers: PropertyAnswers) -> PropertyDefinition:
    """Turn prompt answers into a coerced PropertyDefinition.

    Raises:
        InvalidNameError: If the property or custom type name is invalid.
        UnsupportedPropertyTypeError: If a default is given for a type
            that coercion does not support.
        json.JSONDecodeError: If an ``object`` default is not valid JSON.
    """
    problem = check_property_name(answers.name)
    if problem is not None:
        raise InvalidNameError(problem)

    definition = PropertyDefinition(
        name=answers.name,
        type=_resolve_type(answers),
        required=True if answers.required else None,
    )
    if answers.default_value:
        definition = coerce_default(definition, answers.default_value)
    return definition


def add_property(
    store: ModelStore,
    model_name: str,
    answers: PropertyAnswers,
    debug: bool = False,
) -> PropertyDefinition:
    """Build the definition from answers and store it on model_name.

    Raises:
        ModelNotFoundError: If the model does not exist in the store.
        PropertyValidationError: If the store rejects the definition.
    """
    store.get_model(model_name)
    definition = build_property_definition(answers)
    if debug:
        entry = json.dumps(definition.to_schema_entry())
        console.print(f"[dim]{escape(model_name)} property {definition.name}: {escape(entry)}[/dim]")
    store.create_property(model_name, definition)
    return definition
