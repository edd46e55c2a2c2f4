"""Project configuration model for loopgen.

Captures .loopgen.yaml fields with defaults that match the standard
LoopBack project layout.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from loopgen.errors import ProjectNotFoundError

CONFIG_FILENAME = ".loopgen.yaml"

# Presence of either marker identifies a project root.
_ROOT_MARKERS: tuple[str, ...] = (CONFIG_FILENAME, "server/model-config.json")


class ProjectConfig(BaseModel):
    """Project-level configuration loaded from .loopgen.yaml."""

    model_config = {"extra": "forbid"}

    boot_dir: str = "server/boot"
    model_dirs: list[str] = Field(
        default_factory=lambda: ["common/models", "server/models"]
    )
    default_boot_type: Literal["sync", "async"] = "async"
    verbose: bool = False


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for a project marker.

    Args:
        start: Starting path (file or directory). Defaults to cwd.

    Returns:
        Path to the first directory containing .loopgen.yaml or
        server/model-config.json.

    Raises:
        ProjectNotFoundError: If no ancestor carries a marker.
    """
    origin = (start or Path.cwd()).resolve()
    current = origin.parent if origin.is_file() else origin
    while True:
        if any((current / marker).exists() for marker in _ROOT_MARKERS):
            return current
        if current == current.parent:
            raise ProjectNotFoundError(str(origin))
        current = current.parent


def load_project_config(project_root: Path) -> ProjectConfig:
    """Load ProjectConfig from .loopgen.yaml. Returns defaults if not found.

    Args:
        project_root: Path to the project root directory.

    Returns:
        Validated ProjectConfig instance.
    """
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return ProjectConfig()
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return ProjectConfig()
    return ProjectConfig.model_validate(raw)
