# app/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.routers import entries, externals, internals, turnstiles, users, presence, health
from app.database import create_tables
from app.config import settings
from app.middlewares.security import apply_security_middleware
from app.utils.errors import ApiError, api_error_handler
from app.utils.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="Control de Accesos API",
    description="Vehicle entries, external visitors, employee departures and turnstile crossings.",
    version="2.0.0",
    docs_url="/api-docs",
    redoc_url=None,
)

# ── Security / CORS / request log / rate limit ──────────────────────────────
rate_limiter = apply_security_middleware(
    app,
    cors_origins=settings.CORS_ORIGINS,
    rate_limit_max=settings.RATE_LIMIT_MAX,
    rate_limit_window_ms=settings.RATE_LIMIT_WINDOW_MS,
)


# ── Exception Handlers ───────────────────────────────────────────────────────
app.add_exception_handler(ApiError, api_error_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"campo": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "mensaje": "Datos enviados inválidos", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        content = {"ok": False, "mensaje": "Ruta no encontrada"}
    else:
        content = {"ok": False, "mensaje": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "mensaje": "Error inesperado. Intente más tarde."},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(health.router,     prefix="/api",           tags=["Health"])
app.include_router(users.router,      prefix="/api",           tags=["Usuarios"])
app.include_router(entries.router,    prefix="/api/entradas",  tags=["Entradas"])
app.include_router(externals.router,  prefix="/api/externas",  tags=["Externas"])
app.include_router(internals.router,  prefix="/api/internas",  tags=["Internas"])
app.include_router(turnstiles.router, prefix="/api/tornos",    tags=["Tornos"])
app.include_router(presence.router,                            tags=["Presencia"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Access control backend starting up...")
    create_tables()
    logger.info("Database tables ready")
    if not settings.JWT_KEY:
        logger.warning("JWT_KEY is not set: every protected route will reject tokens")
    logger.info(f"Listening on http://{settings.HOST}:{settings.PORT}")
    logger.info("API docs at /api-docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Access control backend shutting down...")
