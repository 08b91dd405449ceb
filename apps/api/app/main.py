from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from app.api.errors import register_exception_handlers
from app.api.routes.router import router as api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.db import create_tables
from app.middleware.request_id import RequestIdMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

configure_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db_auto_create:
        create_tables()
    logger.info("api_started", env=settings.env)
    yield


app = FastAPI(title="Gatherly API", lifespan=lifespan)

# Starlette runs the LAST added middleware FIRST (outermost).
# RequestId + SecurityHeaders wrap CORS so preflight responses get them too.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.get("/health")
def health():
    return {"success": True, "message": "Server is running"}


app.include_router(api_router, prefix="/api")
