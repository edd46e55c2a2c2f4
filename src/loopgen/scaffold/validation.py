"""Name validators shared by the generators and their prompts.

Each validator returns None when the name is acceptable, or a message
suitable for showing the user.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from loopgen.models.property import SUPPORTED_TYPES

_SPECIAL_CHARS = re.compile(r"[/@\s+%:.]")

RESERVED_PROPERTY_NAMES: frozenset[str] = frozenset({"constructor"})

# Label shown for the custom-type entry in the type list.
OTHER_TYPE_CHOICE = "(other)"

TYPE_CHOICES: list[str] = [*SUPPORTED_TYPES, OTHER_TYPE_CHOICE]


def validate_name(name: str) -> str | None:
    if _SPECIAL_CHARS.search(name) or name != quote(name, safe="!*'()"):
        return f"Name cannot contain special characters (/@+%:. ): {name}"
    return None


def validate_required_name(name: str | None) -> str | None:
    if not name:
        return "Name is required"
    return validate_name(name)


def check_property_name(name: str | None) -> str | None:
    """Validate a property name and reject reserved keywords."""
    problem = validate_required_name(name)
    if problem is not None:
        return problem
    if name in RESERVED_PROPERTY_NAMES:
        return f"{name} is a reserved keyword. Please use another name"
    return None
