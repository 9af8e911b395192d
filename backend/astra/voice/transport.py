import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Literal, Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)

VoiceSource = Literal["landing", "preview"]


class Transcript(BaseModel):
    text: str
    is_final: bool


TranscriptCallback = Callable[[Transcript], None]


class SpeechTransport(Protocol):
    def start_listening(self, source: VoiceSource) -> None: ...

    def stop_listening(self) -> None: ...

    def on_transcript(self, callback: TranscriptCallback) -> Callable[[], None]: ...

    def speak(self, text: str) -> None: ...

    @property
    def is_listening(self) -> bool: ...


class BaseSpeechTransport(ABC):
    """Session bookkeeping shared by every transport.

    At most one listening session is active; starting another stops the first.
    Speaking always cancels the utterance in flight.
    """

    def __init__(self):
        self._callbacks: list[TranscriptCallback] = []
        self._listening = False
        self.current_source: VoiceSource | None = None
        self.current_utterance: str | None = None

    @property
    def is_listening(self) -> bool:
        return self._listening

    def start_listening(self, source: VoiceSource) -> None:
        if self._listening:
            self.stop_listening()
        self.current_source = source
        self._listening = True
        self._begin_recognition(source)

    def stop_listening(self) -> None:
        if not self._listening:
            return
        self._end_recognition()
        self._listening = False
        self.current_source = None

    def on_transcript(self, callback: TranscriptCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def emit_transcript(self, transcript: Transcript) -> None:
        for callback in list(self._callbacks):
            try:
                callback(transcript)
            except Exception:
                logger.exception("Transcript callback failed")

    def speak(self, text: str) -> None:
        self._cancel_speech()
        self.current_utterance = text
        self._say(text)

    def finish_utterance(self) -> None:
        self.current_utterance = None

    def recognition_ended(self) -> None:
        """Called when the recognizer stops on its own (error or end of input)."""
        self._listening = False
        self.current_source = None

    @abstractmethod
    def _begin_recognition(self, source: VoiceSource) -> None: ...

    @abstractmethod
    def _end_recognition(self) -> None: ...

    @abstractmethod
    def _cancel_speech(self) -> None: ...

    @abstractmethod
    def _say(self, text: str) -> None: ...
