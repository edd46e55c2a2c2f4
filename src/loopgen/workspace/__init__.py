"""Model persistence for project trees."""

from loopgen.workspace.store import JsonWorkspace, ModelFile, ModelStore

__all__ = ["JsonWorkspace", "ModelFile", "ModelStore"]
