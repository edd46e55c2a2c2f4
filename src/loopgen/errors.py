"""Exception types raised by loopgen generators and the model store."""

from __future__ import annotations


class LoopgenError(Exception):
    """Base class for all loopgen failures that abort a command."""


class ProjectNotFoundError(LoopgenError):
    """Raised when no project root can be located from the start path."""

    def __init__(self, start: str) -> None:
        self.start = start
        super().__init__(
            f"No project found at or above {start} "
            "(expected .loopgen.yaml or server/model-config.json)"
        )


class InvalidNameError(LoopgenError):
    """Raised when a script or property name fails validation."""


class ScriptExistsError(LoopgenError):
    """Raised when generate_boot_script would overwrite an existing file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File already exists: {path}")


class UnsupportedPropertyTypeError(LoopgenError):
    """Raised when a default value is given for a type we cannot coerce."""

    def __init__(self, property_type: object) -> None:
        self.property_type = property_type
        super().__init__(f"Unsupported model property type: {property_type}")


class ModelNotFoundError(LoopgenError):
    """Raised when the selected model does not exist in the workspace."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Model not found: {model_name}")


class PropertyValidationError(LoopgenError):
    """Raised by the model store when a property definition is rejected.

    Carries a mapping of field name to the list of messages for that
    field so callers can report each problem on its own line.
    """

    def __init__(self, model_name: str, details: dict[str, list[str]]) -> None:
        self.model_name = model_name
        self.details = details
        super().__init__(
            f"The `{model_name}` property definition is not valid. "
            f"Details: {self.messages()}"
        )

    def messages(self) -> list[str]:
        """Flatten details into `field` message strings."""
        return [
            f"`{field}` {message}"
            for field, messages in self.details.items()
            for message in messages
        ]
