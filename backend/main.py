from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Optional

from fastapi import FastAPI

from config import Settings, load_settings
from persistence.gateway import PersistenceGateway
from persistence.storage import FileProvider
from recorder.client import ClientRecorder
from routes import events


def create_app(settings: Optional[Settings] = None, provider: Optional[FileProvider] = None) -> FastAPI:
    """Build the recorder service with one shared gateway for the session log."""
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    gateway = PersistenceGateway(settings.log_path, provider=provider, ide=settings.ide)

    app = FastAPI(title="COPE Recorder API", version="0.1.0")
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.recorder = ClientRecorder(gateway, ide=settings.ide)

    app.include_router(events.router)

    @app.get("/")
    def health():
        return {
            "status": "ok",
            "service": "cope-recorder",
            "session": settings.session_id,
        }

    return app


app = create_app()
