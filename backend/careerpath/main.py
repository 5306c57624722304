from contextlib import asynccontextmanager
import logging
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from careerpath.api.routes import catalog, learning, meta, xgen
from careerpath.core.config import settings
from careerpath.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging(settings.log_level)
    logger.info("Career guidance API starting")
    try:
        yield
    finally:
        logger.info("Career guidance API stopped")


app = FastAPI(title="Career Guidance API", version="0.1.0", lifespan=lifespan)

origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "X-User-Id",
        "X-Request-Id",
    ],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or uuid4().hex
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


def _register_routes(prefix: str = "") -> None:
    app.include_router(catalog.router, tags=["catalog"], prefix=prefix)
    app.include_router(learning.router, tags=["learning"], prefix=prefix)
    app.include_router(xgen.router, tags=["xgen"], prefix=prefix)
    app.include_router(meta.router, tags=["meta"], prefix=prefix)


_register_routes("")
_register_routes("/api")
