"""JSON file model store for loopgen.

Reads model definitions from ``<model_dir>/*.json`` under the project
root and merges new property definitions into them. Writes are atomic
(write to .tmp, then rename) so an aborted run never leaves a
half-written model file behind.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from loopgen.errors import ModelNotFoundError, PropertyValidationError
from loopgen.models.config import ProjectConfig
from loopgen.models.property import PropertyDefinition


@dataclass
class ModelFile:
    """A model definition loaded from disk."""

    name: str
    path: Path
    data: dict[str, Any]

    @property
    def properties(self) -> dict[str, Any]:
        return self.data.get("properties") or {}


class ModelStore(Protocol):
    """What the property generator needs from a model-persistence layer."""

    def editable_model_names(self) -> list[str]: ...

    def get_model(self, name: str) -> ModelFile: ...

    def create_property(self, model_name: str, definition: PropertyDefinition) -> None: ...


class JsonWorkspace:
    """Model store backed by the JSON files of a project tree.

    File layout:
        <project_root>/
            common/models/{model}.json
            server/models/{model}.json

    The directories searched come from ProjectConfig.model_dirs, in
    order; the first file declaring a model name wins.
    """

    def __init__(self, project_root: Path, config: ProjectConfig | None = None) -> None:
        self.project_root = project_root
        self.config = config or ProjectConfig()

    def list_models(self) -> list[ModelFile]:
        """Load every model definition found in the configured directories.

        Files that are not JSON objects with a string ``name`` are
        skipped; they are not model definitions.
        """
        models: dict[str, ModelFile] = {}
        for model_dir in self.config.model_dirs:
            directory = self.project_root / model_dir
            if not directory.is_dir():
                continue
            for path in sorted(directory.glob("*.json")):
                data = json.loads(path.read_text(encoding="utf-8"))
                if not isinstance(data, dict) or not isinstance(data.get("name"), str):
                    continue
                models.setdefault(data["name"], ModelFile(data["name"], path, data))
        return list(models.values())

    def editable_model_names(self) -> list[str]:
        return sorted(model.name for model in self.list_models())

    def get_model(self, name: str) -> ModelFile:
        """Return the model called name.

        Raises:
            ModelNotFoundError: If no model file declares that name.
        """
        for model in self.list_models():
            if model.name == name:
                return model
        raise ModelNotFoundError(name)

    def create_property(self, model_name: str, definition: PropertyDefinition) -> None:
        """Add definition to the model's ``properties`` and save the file.

        Args:
            model_name: Name of the model to extend.
            definition: The coerced property definition.

        Raises:
            ModelNotFoundError: If the model does not exist.
            PropertyValidationError: If the property name is already taken.
        """
        model = self.get_model(model_name)
        if definition.name in model.properties:
            raise PropertyValidationError(model_name, {"name": ["is not unique"]})

        properties = dict(model.properties)
        properties[definition.name] = definition.to_schema_entry()
        model.data["properties"] = properties

        # Atomic write
        content = json.dumps(model.data, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
        tmp_path = model.path.with_suffix(".json.tmp")
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(model.path)
