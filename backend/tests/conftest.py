import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from astra.db.base import Base
from astra.pipeline.command_executor import slugify_path
from astra.schemas.blueprint import BlueprintResponse, BlueprintUpdate, LayoutMetadata, Page
from astra.services.blueprint_service import default_home_page, next_default_name
from astra.services.store import SqlBlueprintStore
from astra.voice.transport import BaseSpeechTransport, VoiceSource


class FakeBlueprintStore:
    """In-memory BlueprintStore with a monotonic clock so ordering is deterministic."""

    def __init__(self):
        self.blueprints: dict[uuid.UUID, BlueprintResponse] = {}
        self.update_calls: list[tuple[uuid.UUID, BlueprintUpdate]] = []
        self.fail_updates = False
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def add(self, blueprint: BlueprintResponse) -> BlueprintResponse:
        self.blueprints[blueprint.id] = blueprint
        return blueprint

    async def create(self, name: str | None = None) -> BlueprintResponse:
        now = self._tick()
        blueprint = BlueprintResponse(
            id=uuid.uuid4(),
            name=name or next_default_name([b.name for b in self.blueprints.values()]),
            created_at=now,
            updated_at=now,
            pages=[default_home_page()],
            layout=LayoutMetadata(),
        )
        return self.add(blueprint)

    async def get(self, blueprint_id: uuid.UUID) -> BlueprintResponse | None:
        blueprint = self.blueprints.get(blueprint_id)
        if blueprint is not None and not blueprint.pages:
            blueprint = self.add(blueprint.model_copy(update={"pages": [default_home_page()], "updated_at": self._tick()}))
        return blueprint

    async def update(self, blueprint_id: uuid.UUID, updates: BlueprintUpdate) -> BlueprintResponse | None:
        self.update_calls.append((blueprint_id, updates))
        if self.fail_updates or blueprint_id not in self.blueprints:
            return None
        fields = {name: getattr(updates, name) for name in updates.model_fields_set}
        fields["updated_at"] = self._tick()
        return self.add(self.blueprints[blueprint_id].model_copy(update=fields))

    async def list(self) -> list[BlueprintResponse]:
        return sorted(self.blueprints.values(), key=lambda b: b.updated_at, reverse=True)

    async def delete(self, blueprint_id: uuid.UUID) -> bool:
        return self.blueprints.pop(blueprint_id, None) is not None


class FakeSpeechTransport(BaseSpeechTransport):
    """Records every hook call instead of touching audio devices."""

    def __init__(self):
        super().__init__()
        self.events: list[tuple] = []
        self.spoken: list[str] = []

    def _begin_recognition(self, source: VoiceSource) -> None:
        self.events.append(("begin", source))

    def _end_recognition(self) -> None:
        self.events.append(("end",))

    def _cancel_speech(self) -> None:
        self.events.append(("cancel",))

    def _say(self, text: str) -> None:
        self.events.append(("say", text))
        self.spoken.append(text)


def make_page(name: str, page_id: str | None = None, title: str | None = None) -> Page:
    return Page(
        id=page_id or f"page_{name.lower().replace(' ', '_')}",
        name=name,
        title=title or name,
        path=slugify_path(name),
        content=f"This is the {name} page.",
    )


def make_blueprint(*pages: Page, name: str = "Test App") -> BlueprintResponse:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return BlueprintResponse(
        id=uuid.uuid4(),
        name=name,
        created_at=now,
        updated_at=now,
        pages=list(pages) or [default_home_page()],
        layout=LayoutMetadata(),
    )


@pytest.fixture
def fake_store():
    return FakeBlueprintStore()


@pytest.fixture
def transport():
    return FakeSpeechTransport()


@pytest.fixture
async def db_session():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def sql_store(db_session):
    return SqlBlueprintStore(db_session)
