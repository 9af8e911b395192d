import re
from collections.abc import Callable

from astra.schemas.command import AddPageCommand, Command, DeletePageCommand, RenamePageCommand
from astra.schemas.intent import IntentContext, IntentResult, IntentSuggestion

VAGUE_MESSAGE = "I'm not sure what you'd like to do. Here are some suggestions:"
UNKNOWN_MESSAGE = (
    "I didn't understand that command. Try: 'add page <name>', "
    "'rename page <old> to <new>', or 'delete page <name>'"
)

MIN_INPUT_LENGTH = 3
MAX_SUGGESTIONS = 4

VAGUE_WORDS = {
    "add", "create", "make", "new", "page",
    "rename", "change", "delete", "remove",
    "help", "what", "how",
}

# Order matters: suggestions are emitted in this order before truncation
COMMON_PAGES = ["Settings", "About", "Contact", "Dashboard"]

ADD_PAGE_PATTERNS = [
    re.compile(r"^(add|create|new|make)\s+page\s+(.+)$", re.IGNORECASE),
    re.compile(r"^add\s+(.+)\s+page$", re.IGNORECASE),
    re.compile(r"^create\s+(.+)$", re.IGNORECASE),
]

RENAME_PAGE_PATTERNS = [
    re.compile(r"^(rename|change)\s+page\s+(.+?)\s+to\s+(.+)$", re.IGNORECASE),
    re.compile(r"^rename\s+(.+?)\s+to\s+(.+)$", re.IGNORECASE),
    re.compile(r"^change\s+(.+?)\s+to\s+(.+)$", re.IGNORECASE),
]

DELETE_PAGE_PATTERNS = [
    re.compile(r"^(delete|remove)\s+page\s+(.+)$", re.IGNORECASE),
    re.compile(r"^delete\s+(.+)$", re.IGNORECASE),
    re.compile(r"^remove\s+(.+)$", re.IGNORECASE),
]


def analyze_intent(text: str, context: IntentContext) -> IntentResult:
    """Classify one utterance as a direct command, vague input, or unknown input."""
    original = text.strip()
    normalized = original.lower()

    if is_vague_input(normalized):
        return IntentResult(
            mode="vague",
            message=VAGUE_MESSAGE,
            suggestions=generate_suggestions(context),
        )

    command = try_parse_command(original)
    if command is not None:
        return IntentResult(mode="direct", commands=[command])

    return IntentResult(
        mode="unknown",
        message=UNKNOWN_MESSAGE,
        suggestions=generate_suggestions(context),
    )


def is_vague_input(normalized: str) -> bool:
    """Too short, or a bare command word with at most one more token."""
    if len(normalized) < MIN_INPUT_LENGTH:
        return True
    words = normalized.split()
    return len(words) <= 2 and words[0] in VAGUE_WORDS


def generate_suggestions(context: IntentContext) -> list[IntentSuggestion]:
    existing = {name.lower() for name in context.current_pages}
    suggestions: list[IntentSuggestion] = []

    for page in COMMON_PAGES:
        if page.lower() not in existing:
            suggestions.append(IntentSuggestion(
                label=f"Add {page} page",
                command=f"add page {page}",
                description=f"Create a new {page} page",
            ))

    if "home" in existing:
        suggestions.append(IntentSuggestion(
            label="Rename Home to Dashboard",
            command="rename page Home to Dashboard",
            description="Rename the Home page to Dashboard",
        ))

    return suggestions[:MAX_SUGGESTIONS]


def _parse_add_page(original: str) -> Command | None:
    for pattern in ADD_PAGE_PATTERNS:
        match = pattern.match(original)
        if match:
            page_name = match.groups()[-1].strip()
            if page_name:
                return AddPageCommand(page_name=page_name)
    return None


def _parse_rename_page(original: str) -> Command | None:
    for pattern in RENAME_PAGE_PATTERNS:
        match = pattern.match(original)
        if match:
            old_name, new_name = (group.strip() for group in match.groups()[-2:])
            if old_name and new_name:
                return RenamePageCommand(old_name=old_name, new_name=new_name)
    return None


def _parse_delete_page(original: str) -> Command | None:
    for pattern in DELETE_PAGE_PATTERNS:
        match = pattern.match(original)
        if match:
            page_name = match.groups()[-1].strip()
            if page_name:
                return DeletePageCommand(page_name=page_name)
    return None


COMMAND_PARSERS: list[Callable[[str], Command | None]] = [
    _parse_add_page,
    _parse_rename_page,
    _parse_delete_page,
]


def try_parse_command(original: str) -> Command | None:
    """Run the parsers in priority order; the first match wins."""
    original = original.strip()
    for parser in COMMAND_PARSERS:
        command = parser(original)
        if command is not None:
            return command
    return None
