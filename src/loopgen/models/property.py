"""Property definition model.

A PropertyDefinition is the transient record built from prompt answers,
coerced once, and handed to the model store which merges it into the
model's JSON schema under ``properties[<name>]``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Types the default-value coercion knows how to handle.
SUPPORTED_TYPES: tuple[str, ...] = (
    "string",
    "number",
    "boolean",
    "object",
    "array",
    "date",
    "buffer",
    "geopoint",
    "any",
)

# Generator tokens accepted in place of a literal default.
DEFAULT_FNS: tuple[str, ...] = ("now", "uuid", "guid")


class PropertyDefinition(BaseModel):
    """One field of a model: name, type, required flag and default.

    ``type`` is a type name or, for typed arrays, a one-element list
    naming the item type. ``default`` and ``default_fn`` are mutually
    exclusive; which of them is set is tracked through
    ``model_fields_set`` so that a literal ``None`` default survives.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(min_length=1)
    type: str | list[str]
    required: bool | None = None
    default: Any = None
    default_fn: str | None = Field(default=None, alias="defaultFn")

    @model_validator(mode="after")
    def _check_default_exclusive(self) -> PropertyDefinition:
        if self.has_default and self.default_fn is not None:
            raise ValueError("default and defaultFn are mutually exclusive")
        if self.default_fn is not None and self.default_fn not in DEFAULT_FNS:
            raise ValueError(f"defaultFn must be one of {', '.join(DEFAULT_FNS)}")
        if isinstance(self.type, list) and len(self.type) != 1:
            raise ValueError("array type must name exactly one item type")
        return self

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set

    @property
    def base_type(self) -> str:
        """Type name used for coercion; typed arrays report ``array``."""
        if isinstance(self.type, list):
            return "array"
        return self.type

    @property
    def item_type(self) -> str | None:
        if isinstance(self.type, list):
            return self.type[0]
        return None

    def with_default(self, value: Any) -> PropertyDefinition:
        """Return a copy carrying a literal default and no defaultFn."""
        data = self._base_fields()
        data["default"] = value
        return PropertyDefinition.model_validate(data)

    def with_default_fn(self, fn: str) -> PropertyDefinition:
        """Return a copy carrying a defaultFn token and no literal default."""
        data = self._base_fields()
        data["defaultFn"] = fn
        return PropertyDefinition.model_validate(data)

    def to_schema_entry(self) -> dict[str, Any]:
        """Return the JSON-ready mapping stored under properties[name]."""
        entry: dict[str, Any] = {"type": self.type}
        if self.required:
            entry["required"] = True
        if self.has_default:
            entry["default"] = _jsonable(self.default)
        elif self.default_fn is not None:
            entry["defaultFn"] = self.default_fn
        return entry

    def _base_fields(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.required is not None:
            data["required"] = self.required
        return data


def _jsonable(value: Any) -> Any:
    """Convert bytes to the ``{"type": "Buffer", "data": [...]}`` form."""
    if isinstance(value, (bytes, bytearray)):
        return {"type": "Buffer", "data": list(value)}
    return value
