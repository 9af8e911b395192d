import logging
import re
import uuid
from collections.abc import Callable

from astra.schemas.blueprint import BlueprintResponse, BlueprintUpdate, Page
from astra.schemas.command import AddPageCommand, Command, DeletePageCommand, RenamePageCommand
from astra.schemas.pipeline import ExecutionResult, PagePlan
from astra.services.store import BlueprintStore

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def slugify_path(name: str) -> str:
    return "/" + _WHITESPACE_RUN.sub("-", name.lower())


def new_page_id() -> str:
    return f"page_{uuid.uuid4().hex}"


def find_page_index(pages: list[Page], name: str) -> int | None:
    """Index of the first page whose name or title matches, ignoring case."""
    target = name.lower()
    for index, page in enumerate(pages):
        if page.name.lower() == target or page.title.lower() == target:
            return index
    return None


def _plan_add_page(command: AddPageCommand, blueprint: BlueprintResponse, active_page_id: str | None) -> PagePlan:
    page = Page(
        id=new_page_id(),
        name=command.page_name,
        title=command.page_name,
        path=slugify_path(command.page_name),
        content=f"This is the {command.page_name} page.",
        components=[],
    )
    return PagePlan(pages=[*blueprint.pages, page], new_active_page_id=page.id)


def _plan_rename_page(
    command: RenamePageCommand, blueprint: BlueprintResponse, active_page_id: str | None
) -> PagePlan | None:
    index = find_page_index(blueprint.pages, command.old_name)
    if index is None:
        logger.info("Rename skipped, page not found: %s", command.old_name)
        return None

    pages = list(blueprint.pages)
    pages[index] = pages[index].model_copy(update={
        "name": command.new_name,
        "title": command.new_name,
        "path": slugify_path(command.new_name),
    })
    return PagePlan(pages=pages)


def _plan_delete_page(
    command: DeletePageCommand, blueprint: BlueprintResponse, active_page_id: str | None
) -> PagePlan | None:
    if len(blueprint.pages) <= 1:
        logger.info("Refusing to delete the last page of blueprint %s", blueprint.id)
        return None

    index = find_page_index(blueprint.pages, command.page_name)
    if index is None:
        logger.info("Delete skipped, page not found: %s", command.page_name)
        return None

    removed = blueprint.pages[index]
    pages = [page for i, page in enumerate(blueprint.pages) if i != index]
    new_active = pages[0].id if active_page_id == removed.id else None
    return PagePlan(pages=pages, new_active_page_id=new_active)


_PLANNERS: dict[str, Callable[..., PagePlan | None]] = {
    "ADD_PAGE": _plan_add_page,
    "RENAME_PAGE": _plan_rename_page,
    "DELETE_PAGE": _plan_delete_page,
}


def plan_command(
    command: Command, blueprint: BlueprintResponse, active_page_id: str | None = None
) -> PagePlan | None:
    """Compute the new page sequence without touching storage. None means no change."""
    planner = _PLANNERS.get(command.type)
    if planner is None:
        logger.warning("Unsupported command type: %s", command.type)
        return None
    return planner(command, blueprint, active_page_id)


async def execute_command(
    store: BlueprintStore,
    command: Command,
    blueprint: BlueprintResponse,
    active_page_id: str | None = None,
) -> ExecutionResult | None:
    """Apply one command to one blueprint snapshot and persist it through the store.

    Returns None when the command is refused (target missing, last page) or the
    store did not accept the update; in both cases the stored blueprint is unchanged
    as far as the caller is concerned.
    """
    plan = plan_command(command, blueprint, active_page_id)
    if plan is None:
        return None

    updated = await store.update(blueprint.id, BlueprintUpdate(pages=plan.pages))
    if updated is None:
        logger.error("Failed to save %s for blueprint %s", command.type, blueprint.id)
        return None

    logger.info("Applied %s to blueprint %s (%d page(s))", command.type, blueprint.id, len(updated.pages))
    return ExecutionResult(updated_blueprint=updated, new_active_page_id=plan.new_active_page_id)


def resolve_active_page_id(blueprint: BlueprintResponse, active_page_id: str | None) -> str | None:
    """Keep the active page if it still exists, otherwise fall back to the first page."""
    if not blueprint.pages:
        return None
    if active_page_id and any(page.id == active_page_id for page in blueprint.pages):
        return active_page_id
    return blueprint.pages[0].id
