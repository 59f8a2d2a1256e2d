"""Settings and scene document schemas."""
from .settings import AtlasSettings, FilterMode
from .scene import (
    SceneDefinition,
    SceneMesh,
    SceneMaterial,
    SceneTexture,
    SceneBlendShape,
    SceneBlendShapeFrame,
)

__all__ = [
    "AtlasSettings",
    "FilterMode",
    "SceneDefinition",
    "SceneMesh",
    "SceneMaterial",
    "SceneTexture",
    "SceneBlendShape",
    "SceneBlendShapeFrame",
]
