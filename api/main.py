from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import aiosqlite
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config, db
from posts import router as posts_router

logger = logging.getLogger(__name__)

config.configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the store once per process; failure here stops startup.
    database = db.Database(
        config.database_path(),
        busy_timeout_ms=config.database_busy_timeout_ms(),
    )
    await database.init()
    app.state.db = database
    try:
        yield
    finally:
        app.state.db = None


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(posts_router.router, tags=["posts"])


def _without_input(errors) -> list[dict]:
    # Echoed input may hold text that cannot be encoded as UTF-8.
    return [{key: value for key, value in error.items() if key != "input"} for error in errors]


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON and invalid fields are both client errors.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(_without_input(exc.errors()))},
    )


@app.exception_handler(aiosqlite.Error)
async def store_error_handler(request: Request, exc: aiosqlite.Error) -> JSONResponse:
    logger.error("store_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Store error."},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "blog posts api"}
