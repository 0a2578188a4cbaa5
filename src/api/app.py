from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from src.app.errors import AuthServiceError, PersistenceError
from .error import ClientError, status_code_for
from .middleware import (
    CorrelationIdFilter,
    correlation_id_middleware,
    get_correlation_id,
    request_logging_middleware,
)
import logging

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"
LOG_HANDLER_NAME = "session-auth-service"


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    handler.set_name(LOG_HANDLER_NAME)

    root = logging.getLogger()
    root.setLevel(level.upper())
    # Replace the handler installed by a previous create_app call
    for existing in [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.code, "message": exc.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    error_dict = {"code": "VALIDATION_ERROR", "message": "Invalid request", "errors": errors}
    logger.warning(f"Request validation failed: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


def create_app(ApplicationConfig, lifespan=None) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)
    expose_internal_errors = ApplicationConfig.ENVIRONMENT == "development"

    async def handle_service_error(request: Request, exc: AuthServiceError):
        status_code = status_code_for(exc)
        error_dict = {"code": exc.code, "message": exc.message}
        if exc.errors:
            error_dict["errors"] = exc.errors
        logger.warning(f"Client error: {exc.code} ({status_code})")
        return JSONResponse(status_code=status_code, content={"error": error_dict})

    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error(
            "Persistence error (correlation id %s): %s %s",
            get_correlation_id(),
            exc.message,
            exc.errors,
        )
        error_dict = {"code": exc.code, "message": "Internal server error", "retryable": True}
        if expose_internal_errors:
            error_dict["message"] = exc.message
            error_dict["errors"] = exc.errors
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
        )

    app = FastAPI(title="Session Auth Service", version="0.1.0", lifespan=lifespan)

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(request_logging_middleware)
    # Registered last so it wraps the logging middleware
    app.middleware("http")(correlation_id_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import activity, admin, auth, health_check, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(activity.router, tags=["Activity"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(PersistenceError, handle_persistence_error)
    app.add_exception_handler(AuthServiceError, handle_service_error)

    return app
