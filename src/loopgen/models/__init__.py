"""loopgen data models - re-exports all public model classes."""

from loopgen.models.config import ProjectConfig
from loopgen.models.property import DEFAULT_FNS, SUPPORTED_TYPES, PropertyDefinition

__all__ = [
    "DEFAULT_FNS",
    "ProjectConfig",
    "PropertyDefinition",
    "SUPPORTED_TYPES",
]
