# backend/huddle/main.py

import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.routes import events, leagues, rsvp, invites
from .core.config import get_settings
from .db import init_db

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title=settings.PROJECT_NAME)

init_db()


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    """Error bodies are human-readable strings, not JSON."""
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def plain_text_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return PlainTextResponse("Invalid request", status_code=422)


app.include_router(events.router)
app.include_router(leagues.router)
app.include_router(rsvp.router)
app.include_router(invites.router)

# mounted last so the API routes win over files with the same path
os.makedirs(settings.IMAGES_DIR, exist_ok=True)
app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")


def run():
    logger.info(
        f"Server running on http://localhost:{settings.PORT}/pages/homepage.html"
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
