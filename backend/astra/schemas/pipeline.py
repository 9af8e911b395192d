from pydantic import BaseModel

from astra.schemas.blueprint import BlueprintResponse, Page
from astra.schemas.intent import IntentResult


class PagePlan(BaseModel):
    pages: list[Page]
    new_active_page_id: str | None = None


class ExecutionResult(BaseModel):
    updated_blueprint: BlueprintResponse
    new_active_page_id: str | None = None


class CommandRequest(BaseModel):
    text: str
    active_page_id: str | None = None


class CommandOutcome(BaseModel):
    intent: IntentResult
    applied: bool
    blueprint: BlueprintResponse
    active_page_id: str | None = None
    message: str | None = None
