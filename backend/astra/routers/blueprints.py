import uuid

from fastapi import APIRouter, Depends, HTTPException

from astra.dependencies import get_blueprint_store
from astra.schemas.blueprint import BlueprintCreate, BlueprintResponse, BlueprintUpdate
from astra.services.store import BlueprintStore

router = APIRouter(prefix="/api/v1/blueprints", tags=["blueprints"])


@router.post("", response_model=BlueprintResponse, status_code=201)
async def create_blueprint(data: BlueprintCreate, store: BlueprintStore = Depends(get_blueprint_store)):
    return await store.create(data.name)


@router.get("", response_model=list[BlueprintResponse])
async def list_blueprints(store: BlueprintStore = Depends(get_blueprint_store)):
    return await store.list()


@router.get("/{blueprint_id}", response_model=BlueprintResponse)
async def get_blueprint(blueprint_id: uuid.UUID, store: BlueprintStore = Depends(get_blueprint_store)):
    blueprint = await store.get(blueprint_id)
    if not blueprint:
        raise HTTPException(status_code=404, detail="Blueprint not found")
    return blueprint


@router.patch("/{blueprint_id}", response_model=BlueprintResponse)
async def update_blueprint(
    blueprint_id: uuid.UUID,
    data: BlueprintUpdate,
    store: BlueprintStore = Depends(get_blueprint_store),
):
    if data.pages is not None and not data.pages:
        raise HTTPException(status_code=422, detail="A blueprint must keep at least one page")
    blueprint = await store.update(blueprint_id, data)
    if not blueprint:
        raise HTTPException(status_code=404, detail="Blueprint not found")
    return blueprint


@router.delete("/{blueprint_id}", status_code=204)
async def delete_blueprint(blueprint_id: uuid.UUID, store: BlueprintStore = Depends(get_blueprint_store)):
    deleted = await store.delete(blueprint_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Blueprint not found")
