"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from dxfscene.config import Settings, settings
from dxfscene.engine.config import SceneOptions


def get_settings() -> Settings:
    return settings


def get_scene_options(current: Settings = Depends(get_settings)) -> SceneOptions:
    return current.scene_options()
