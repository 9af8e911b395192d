import uuid
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from astra.schemas.blueprint import BlueprintCreate, BlueprintResponse, BlueprintUpdate
from astra.services import blueprint_service


class BlueprintStore(Protocol):
    """Persistence boundary for blueprints. Every method returns detached snapshots."""

    async def create(self, name: str | None = None) -> BlueprintResponse: ...

    async def get(self, blueprint_id: uuid.UUID) -> BlueprintResponse | None: ...

    async def update(self, blueprint_id: uuid.UUID, updates: BlueprintUpdate) -> BlueprintResponse | None: ...

    async def list(self) -> list[BlueprintResponse]: ...

    async def delete(self, blueprint_id: uuid.UUID) -> bool: ...


class SqlBlueprintStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str | None = None) -> BlueprintResponse:
        blueprint = await blueprint_service.create_blueprint(self.db, BlueprintCreate(name=name))
        return BlueprintResponse.model_validate(blueprint)

    async def get(self, blueprint_id: uuid.UUID) -> BlueprintResponse | None:
        blueprint = await blueprint_service.get_blueprint(self.db, blueprint_id)
        return BlueprintResponse.model_validate(blueprint) if blueprint else None

    async def update(self, blueprint_id: uuid.UUID, updates: BlueprintUpdate) -> BlueprintResponse | None:
        blueprint = await blueprint_service.update_blueprint(self.db, blueprint_id, updates)
        return BlueprintResponse.model_validate(blueprint) if blueprint else None

    async def list(self) -> list[BlueprintResponse]:
        blueprints = await blueprint_service.list_blueprints(self.db)
        return [BlueprintResponse.model_validate(b) for b in blueprints]

    async def delete(self, blueprint_id: uuid.UUID) -> bool:
        return await blueprint_service.delete_blueprint(self.db, blueprint_id)
