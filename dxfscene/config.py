"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from dxfscene.engine.config import SceneOptions


class Settings(BaseSettings):
    dxfscene_env: str = "development"
    dxfscene_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:8080"]

    # Default scene options
    black_white_inversion: bool = True
    color_correction: bool = False
    clear_color: int = 0xFFFFFF
    file_encoding: str = "utf-8"
    retain_parsed_dxf: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def scene_options(self) -> SceneOptions:
        return SceneOptions(
            black_white_inversion=self.black_white_inversion,
            color_correction=self.color_correction,
            clear_color=self.clear_color,
            file_encoding=self.file_encoding,
            retain_parsed_dxf=self.retain_parsed_dxf,
        )


settings = Settings()
