import logging
import uuid

from astra.pipeline.command_executor import execute_command, find_page_index, resolve_active_page_id
from astra.pipeline.intent_analyzer import analyze_intent
from astra.schemas.blueprint import BlueprintResponse
from astra.schemas.command import Command
from astra.schemas.intent import IntentContext
from astra.schemas.pipeline import CommandOutcome
from astra.services.store import BlueprintStore

logger = logging.getLogger(__name__)


def build_context(blueprint: BlueprintResponse) -> IntentContext:
    return IntentContext(current_pages=blueprint.page_names, app_name=blueprint.name)


def describe_success(command: Command) -> str:
    if command.type == "ADD_PAGE":
        return f"Added page {command.page_name}."
    if command.type == "RENAME_PAGE":
        return f"Renamed page {command.old_name} to {command.new_name}."
    return f"Deleted page {command.page_name}."


def describe_failure(command: Command, blueprint: BlueprintResponse) -> str:
    if command.type == "DELETE_PAGE" and len(blueprint.pages) <= 1:
        return "Cannot delete the last page."
    if command.type == "RENAME_PAGE" and find_page_index(blueprint.pages, command.old_name) is None:
        return f"Page {command.old_name} not found."
    if command.type == "DELETE_PAGE" and find_page_index(blueprint.pages, command.page_name) is None:
        return f"Page {command.page_name} not found."
    return "The change could not be saved."


async def process_command_text(
    store: BlueprintStore,
    blueprint_id: uuid.UUID,
    text: str,
    active_page_id: str | None = None,
) -> CommandOutcome | None:
    """Run one analyze-then-execute cycle against the latest stored snapshot."""
    blueprint = await store.get(blueprint_id)
    if blueprint is None:
        logger.info("Cannot process command, blueprint %s not found", blueprint_id)
        return None

    logger.info("Processing command for %s: %r", blueprint_id, text)
    intent = analyze_intent(text, build_context(blueprint))

    if intent.mode != "direct":
        logger.info("Command not recognized (%s): %r", intent.mode, text)
        return CommandOutcome(
            intent=intent,
            applied=False,
            blueprint=blueprint,
            active_page_id=resolve_active_page_id(blueprint, active_page_id),
            message=intent.message,
        )

    applied = False
    messages = []
    for command in intent.commands:
        result = await execute_command(store, command, blueprint, active_page_id)
        if result is None:
            messages.append(describe_failure(command, blueprint))
            continue
        applied = True
        blueprint = result.updated_blueprint
        if result.new_active_page_id:
            active_page_id = result.new_active_page_id
        messages.append(describe_success(command))

    return CommandOutcome(
        intent=intent,
        applied=applied,
        blueprint=blueprint,
        active_page_id=resolve_active_page_id(blueprint, active_page_id),
        message=" ".join(messages),
    )
