from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from astra.config import settings
from astra.routers import blueprints, commands, voice
from astra.utils.logging_utils import configure_logging

configure_logging(settings.log_level, settings.debug, settings.log_dir)

app = FastAPI(title="Astra", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(blueprints.router)
app.include_router(commands.router)
app.include_router(voice.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
