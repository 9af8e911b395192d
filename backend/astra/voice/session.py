import logging
import uuid
from collections import deque

from astra.schemas.pipeline import CommandOutcome
from astra.services.command_service import process_command_text
from astra.services.store import BlueprintStore
from astra.voice.transport import SpeechTransport, Transcript

logger = logging.getLogger(__name__)


class VoiceCommandSession:
    """Feeds final transcripts from a speech transport into the command pipeline.

    Interim transcripts are kept for display only. Final transcripts are queued
    and processed one at a time, each against the latest stored blueprint.
    """

    def __init__(
        self,
        transport: SpeechTransport,
        store: BlueprintStore,
        blueprint_id: uuid.UUID,
        active_page_id: str | None = None,
    ):
        self.transport = transport
        self.store = store
        self.blueprint_id = blueprint_id
        self.active_page_id = active_page_id
        self.interim_text = ""
        self._pending: deque[str] = deque()
        self._unsubscribe = transport.on_transcript(self._on_transcript)

    def _on_transcript(self, transcript: Transcript) -> None:
        if not transcript.is_final:
            self.interim_text = transcript.text
            return
        self.interim_text = ""
        if transcript.text.strip():
            self._pending.append(transcript.text)

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    async def process_pending(self) -> list[CommandOutcome]:
        outcomes = []
        while self._pending:
            text = self._pending.popleft()
            outcome = await process_command_text(self.store, self.blueprint_id, text, self.active_page_id)
            if outcome is None:
                logger.warning("Voice command dropped, blueprint %s is gone", self.blueprint_id)
                self._pending.clear()
                break
            self.active_page_id = outcome.active_page_id
            if outcome.message:
                self.transport.speak(outcome.message)
            outcomes.append(outcome)
        return outcomes

    def close(self) -> None:
        self._unsubscribe()
        self.transport.stop_listening()
