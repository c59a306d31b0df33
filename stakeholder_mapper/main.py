from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from stakeholder_mapper import __version__
from stakeholder_mapper.core.config import settings
from stakeholder_mapper.core.errors import (
    MapperError,
    global_exception_handler,
    http_exception_handler,
    mapper_exception_handler,
)
from stakeholder_mapper.core.sentry import init_sentry
from stakeholder_mapper.middleware.security import (
    RequestBodySizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from stakeholder_mapper.modules.reporting.router import router as reporting_router
from stakeholder_mapper.modules.stakeholders.router import router as stakeholders_router

# ── Sentry: must be initialised BEFORE FastAPI app is created ────────────────
sentry_enabled = init_sentry(settings.SENTRY_DSN, settings.SENTRY_ENVIRONMENT, settings.APP_VERSION)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    logger.info("Starting Stakeholder Mapper API", env=settings.APP_ENV, sentry_enabled=sentry_enabled)
    yield
    logger.info("Shutting down Stakeholder Mapper API")


_is_prod = settings.APP_ENV == "production"

app = FastAPI(
    title="Stakeholder Influence Mapper API",
    description="Map stakeholder influence, get engagement recommendations and export a strategic report.",
    version=__version__,
    docs_url=None if _is_prod else "/docs",
    redoc_url=None if _is_prod else "/redoc",
    openapi_url=None if _is_prod else "/openapi.json",
    lifespan=lifespan,
)

app.add_exception_handler(MapperError, mapper_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-ID"],
    expose_headers=["Content-Disposition"],
)
# Security middleware (added last = outermost = first to see requests, last to touch responses)
app.add_middleware(
    RequestBodySizeLimitMiddleware,  # type: ignore[arg-type]
    max_bytes=settings.MAX_REQUEST_BODY_BYTES,
)
app.add_middleware(
    SecurityHeadersMiddleware,  # type: ignore[arg-type]
    is_production=_is_prod,
)


# ── X-API-Version response header ────────────────────────────────────────────


@app.middleware("http")
async def add_version_header(request: Request, call_next) -> Response:
    response = await call_next(request)
    response.headers["X-API-Version"] = "v1"
    return response


# ── Health check (root-level, not under /v1) ─────────────────────────────────


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy", "service": "stakeholder-mapper", "version": __version__}


# ── /v1 versioned router ──────────────────────────────────────────────────────

api_v1 = APIRouter(prefix="/v1")

api_v1.include_router(stakeholders_router)
api_v1.include_router(reporting_router)

app.include_router(api_v1)
