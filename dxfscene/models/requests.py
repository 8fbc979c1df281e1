"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dxfscene.models.scene import SceneModel


class SceneOptionsModel(BaseModel):
    """Per-request overrides of the configured scene options."""

    model_config = ConfigDict(populate_by_name=True)

    black_white_inversion: bool | None = Field(default=None, alias="blackWhiteInversion")
    color_correction: bool | None = Field(default=None, alias="colorCorrection")
    clear_color: int | None = Field(default=None, alias="clearColor", ge=0, le=0xFFFFFF)
    file_encoding: str | None = Field(default=None, alias="fileEncoding")
    retain_parsed_dxf: bool | None = Field(default=None, alias="retainParsedDxf")

    def overrides(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SceneRequest(BaseModel):
    scene: SceneModel = Field(..., description="Serialized scene from the batching stage")
    options: SceneOptionsModel = Field(
        default_factory=SceneOptionsModel,
        description="Optional overrides of the default scene options",
    )
