import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.v1.router import router as api_router
from app.core.config import Settings, settings as default_settings
from app.core.deps import build_backend
from app.core.errors import AppError
from app.core.telemetry import setup_logging, setup_telemetry
from app.schemas.common import ErrorResponse


log = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(code=exc.code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    body = ErrorResponse(code="server_error", message="Server error")
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(title="Maison API", version="0.1.0")
    app.state.backend = build_backend(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)
    app.mount("/uploads", StaticFiles(directory=app.state.backend.files.base), name="uploads")

    setup_telemetry(app, settings)
    if not app.state.backend.authorize.configured:
        log.warning("ADMIN_PASSWORD is not set, admin endpoints will refuse every request")
    log.info("%s ready, payments go to %s", settings.service_name, settings.payment_phone)
    return app


app = create_app()
