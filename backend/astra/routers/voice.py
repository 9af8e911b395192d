import json
import logging
import uuid

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from astra.dependencies import get_blueprint_store
from astra.services.store import BlueprintStore
from astra.voice.session import VoiceCommandSession
from astra.voice.transport import Transcript
from astra.voice.websocket_transport import WebSocketSpeechTransport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/blueprints/{blueprint_id}/voice", tags=["voice"])

VOICE_SOURCES = {"landing", "preview"}


@router.websocket("")
async def voice_channel(
    websocket: WebSocket,
    blueprint_id: uuid.UUID,
    store: BlueprintStore = Depends(get_blueprint_store),
):
    if await store.get(blueprint_id) is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    transport = WebSocketSpeechTransport(websocket)
    session = VoiceCommandSession(transport, store, blueprint_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                message = None
            if not isinstance(message, dict):
                transport.send({"event": "error", "message": "Messages must be JSON objects"})
                await transport.flush()
                continue
            kind = message.get("type")

            if kind == "start":
                source = message.get("source", "preview")
                if source not in VOICE_SOURCES:
                    transport.send({"event": "error", "message": f"Unknown voice source: {source}"})
                else:
                    transport.start_listening(source)
            elif kind == "stop":
                transport.stop_listening()
            elif kind == "ended":
                transport.recognition_ended()
            elif kind == "spoken":
                transport.finish_utterance()
            elif kind == "transcript":
                try:
                    transcript = Transcript.model_validate(message)
                except ValidationError as e:
                    transport.send({"event": "error", "message": str(e)})
                else:
                    transport.emit_transcript(transcript)
                    if not transcript.is_final:
                        transport.send({"event": "interim", "text": transcript.text})
            else:
                transport.send({"event": "error", "message": f"Unknown message type: {kind}"})

            for outcome in await session.process_pending():
                transport.send({"event": "command_result", **outcome.model_dump(mode="json")})
            await transport.flush()
    except WebSocketDisconnect:
        logger.info("Voice channel closed for blueprint %s", blueprint_id)
    finally:
        session.close()
