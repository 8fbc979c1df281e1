"""POST /api/scene: resolve a serialized scene into entities."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, HTTPException

from dxfscene.dependencies import get_scene_options
from dxfscene.engine.config import SceneOptions
from dxfscene.engine.errors import SceneError
from dxfscene.engine.loader import create_loader
from dxfscene.models.requests import SceneRequest
from dxfscene.models.responses import EntityResponse, LayerResponse, SceneResponse

router = APIRouter()


@router.post("/scene", response_model=SceneResponse)
async def load_scene(
    req: SceneRequest,
    defaults: SceneOptions = Depends(get_scene_options),
) -> SceneResponse:
    start = time.perf_counter()

    loader = create_loader(defaults.merged(**req.options.overrides()))
    try:
        loader.load(req.scene)
    except SceneError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    entities = [EntityResponse.model_validate(e.to_dict()) for e in loader.get_entities()]
    layers = [LayerResponse.model_validate(info.to_dict()) for info in loader.get_layers()]
    elapsed = (time.perf_counter() - start) * 1000

    response = SceneResponse(
        entities=entities,
        layers=layers,
        origin=loader.get_origin(),
        bounds=loader.get_bounds(),
        has_missing_chars=loader.has_missing_chars,
        entity_count=len(entities),
        processing_time_ms=round(elapsed, 3),
        dxf=loader.get_dxf(),
    )
    loader.clear()
    return response
