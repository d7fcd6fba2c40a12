import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from survey_api.core.config import Settings, get_settings
from survey_api.core.errors import register_exception_handlers
from survey_api.core.logging import configure_logging
from survey_api.routers import answers, participants, uploads
from survey_api.services.storage import ParticipantStore
from survey_api.services.uploads import UPLOADS_URL_PREFIX

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    # Fails loudly before the app exists, so nothing starts listening.
    store = ParticipantStore(settings.data_root, settings.upload_root)
    store.ensure_dirs()

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def json_body_limit_middleware(request: Request, call_next):
        content_type = request.headers.get("content-type", "")
        content_length = request.headers.get("content-length")
        if content_type.startswith("application/json") and content_length and content_length.isdigit():
            if int(content_length) > settings.max_json_body_bytes:
                return JSONResponse(
                    status_code=413,
                    content={"error": "Request body too large"},
                )
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(participants.router)
    app.include_router(answers.router)
    app.include_router(uploads.router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=store.upload_dir), name="uploads")

    client_dir = Path(settings.client_dir)
    if client_dir.is_dir():
        app.mount("/", StaticFiles(directory=client_dir, html=True), name="client")
    else:
        logger.warning("client_bundle_missing", extra={"client_dir": str(client_dir)})

    return app


def run() -> None:
    settings = get_settings()
    app = create_app(settings)
    logger.info("server_starting", extra={"host": settings.host, "port": settings.port})
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
