"""Boot script generation for `loopgen boot-script`.

Copies the packaged sync or async template verbatim to
``server/boot/<name>.js`` inside the project tree.
"""

from __future__ import annotations

import posixpath
from pathlib import Path

from rich.console import Console

from loopgen.errors import InvalidNameError, ScriptExistsError
from loopgen.scaffold.validation import validate_required_name

console = Console()

BOOT_SCRIPT_TYPES: tuple[str, ...] = ("async", "sync")


def _get_templates_dir() -> Path:
    """Return the path to the templates directory within the package."""
    return Path(__file__).parent / "templates"


def boot_script_path(name: str, boot_dir: str = "server/boot") -> str:
    """Return the normalized project-relative path for a boot script."""
    return posixpath.normpath(f"{boot_dir}/{name}.js")


def generate_boot_script(
    project_root: Path,
    name: str,
    script_type: str = "async",
    force: bool = False,
    boot_dir: str = "server/boot",
) -> str:
    """Write a boot script from the chosen template.

    Args:
        project_root: Root of the target project.
        name: Script name without the ``.js`` extension.
        script_type: ``"async"`` or ``"sync"``.
        force: If True, overwrite an existing script.
        boot_dir: Boot directory relative to the project root.

    Returns:
        The written path, relative to project_root.

    Raises:
        InvalidNameError: If name is empty or contains special characters.
        ValueError: If script_type is not a known template.
        ScriptExistsError: If the target exists and force is False.
    """
    problem = validate_required_name(name)
    if problem is not None:
        raise InvalidNameError(problem)
    if script_type not in BOOT_SCRIPT_TYPES:
        raise ValueError(
            f"Unknown boot script type '{script_type}'. "
            f"Expected one of: {', '.join(BOOT_SCRIPT_TYPES)}"
        )

    relative = boot_script_path(name, boot_dir)
    target = project_root / relative
    if target.exists() and not force:
        raise ScriptExistsError(relative)

    template_file = _get_templates_dir() / f"{script_type}.js"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(template_file.read_text(encoding="utf-8"), encoding="utf-8")

    console.print(f"  [green]\u2713[/green] create {relative}")
    return relative
