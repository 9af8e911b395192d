import asyncio

from fastapi import WebSocket

from astra.voice.transport import BaseSpeechTransport, VoiceSource


class WebSocketSpeechTransport(BaseSpeechTransport):
    """Drives a browser-side recognizer and synthesizer over a websocket.

    Hooks only queue events; `flush` sends them from the endpoint's event loop.
    """

    def __init__(self, websocket: WebSocket):
        super().__init__()
        self.websocket = websocket
        self.outbox: asyncio.Queue[dict] = asyncio.Queue()

    def _begin_recognition(self, source: VoiceSource) -> None:
        self.outbox.put_nowait({"event": "listening", "source": source})

    def _end_recognition(self) -> None:
        self.outbox.put_nowait({"event": "stopped"})

    def _cancel_speech(self) -> None:
        if self.current_utterance is not None:
            self.outbox.put_nowait({"event": "cancel_speech"})

    def _say(self, text: str) -> None:
        self.outbox.put_nowait({"event": "speak", "text": text})

    def send(self, event: dict) -> None:
        self.outbox.put_nowait(event)

    async def flush(self) -> None:
        while not self.outbox.empty():
            await self.websocket.send_json(self.outbox.get_nowait())
