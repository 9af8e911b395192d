import logging
import re
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from astra.models.blueprint import Blueprint, utcnow
from astra.schemas.blueprint import BlueprintCreate, BlueprintUpdate, LayoutMetadata, Page

logger = logging.getLogger(__name__)

DEFAULT_NAME_PATTERN = re.compile(r"^New App (\d+)$")


def default_home_page() -> Page:
    return Page(
        id="home",
        name="Home",
        title="Home",
        path="/",
        content="Welcome to your new app. This is the home page.",
        components=[],
    )


def next_default_name(existing_names: list[str]) -> str:
    """Pick "New App N" with N one past the highest existing default suffix."""
    numbers = []
    for name in existing_names:
        match = DEFAULT_NAME_PATTERN.match(name)
        if match and int(match.group(1)) > 0:
            numbers.append(int(match.group(1)))
    return f"New App {max(numbers) + 1 if numbers else 1}"


async def create_blueprint(db: AsyncSession, data: BlueprintCreate) -> Blueprint:
    name = data.name.strip() if data.name and data.name.strip() else None
    if name is None:
        result = await db.execute(select(Blueprint.name))
        name = next_default_name(list(result.scalars().all()))

    now = utcnow()
    blueprint = Blueprint(
        name=name,
        pages=[default_home_page().model_dump()],
        layout=LayoutMetadata().model_dump(),
        created_at=now,
        updated_at=now,
    )
    db.add(blueprint)
    await db.commit()
    await db.refresh(blueprint)
    logger.info("Created blueprint %s (%s) with %d page(s)", blueprint.id, blueprint.name, len(blueprint.pages))
    return blueprint


async def list_blueprints(db: AsyncSession) -> list[Blueprint]:
    result = await db.execute(select(Blueprint).order_by(Blueprint.updated_at.desc()))
    return list(result.scalars().all())


async def get_blueprint(db: AsyncSession, blueprint_id: uuid.UUID) -> Blueprint | None:
    blueprint = await db.get(Blueprint, blueprint_id)
    if not blueprint:
        return None
    if not blueprint.pages:
        logger.warning("Blueprint %s has no pages; restoring default Home page", blueprint_id)
        blueprint.pages = [default_home_page().model_dump()]
        blueprint.updated_at = utcnow()
        await db.commit()
        await db.refresh(blueprint)
    return blueprint


async def update_blueprint(db: AsyncSession, blueprint_id: uuid.UUID, data: BlueprintUpdate) -> Blueprint | None:
    blueprint = await db.get(Blueprint, blueprint_id)
    if not blueprint:
        return None
    # model_dump recurses, so pages and layout arrive as plain JSON-ready dicts
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(blueprint, field, value)
    blueprint.updated_at = utcnow()
    await db.commit()
    await db.refresh(blueprint)
    return blueprint


async def delete_blueprint(db: AsyncSession, blueprint_id: uuid.UUID) -> bool:
    blueprint = await db.get(Blueprint, blueprint_id)
    if not blueprint:
        return False
    await db.delete(blueprint)
    await db.commit()
    logger.info("Deleted blueprint %s", blueprint_id)
    return True
