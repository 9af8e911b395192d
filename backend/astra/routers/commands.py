import uuid

from fastapi import APIRouter, Depends, HTTPException

from astra.dependencies import get_blueprint_store
from astra.pipeline.intent_analyzer import analyze_intent, generate_suggestions
from astra.schemas.intent import IntentContext, IntentRequest, IntentResult, IntentSuggestion
from astra.schemas.pipeline import CommandOutcome, CommandRequest
from astra.services.command_service import build_context, process_command_text
from astra.services.store import BlueprintStore

router = APIRouter(prefix="/api/v1", tags=["commands"])


@router.post("/intent", response_model=IntentResult)
async def analyze(data: IntentRequest):
    context = IntentContext(current_pages=data.current_pages, app_name=data.app_name)
    return analyze_intent(data.text, context)


@router.post("/blueprints/{blueprint_id}/commands", response_model=CommandOutcome)
async def run_command(
    blueprint_id: uuid.UUID,
    data: CommandRequest,
    store: BlueprintStore = Depends(get_blueprint_store),
):
    outcome = await process_command_text(store, blueprint_id, data.text, data.active_page_id)
    if outcome is None:
        raise HTTPException(status_code=404, detail="Blueprint not found")
    return outcome


@router.get("/blueprints/{blueprint_id}/suggestions", response_model=list[IntentSuggestion])
async def list_suggestions(blueprint_id: uuid.UUID, store: BlueprintStore = Depends(get_blueprint_store)):
    blueprint = await store.get(blueprint_id)
    if not blueprint:
        raise HTTPException(status_code=404, detail="Blueprint not found")
    return generate_suggestions(build_context(blueprint))
