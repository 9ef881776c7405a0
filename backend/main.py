from contextlib import asynccontextmanager
from typing import Optional
from uuid import uuid4
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import appointments, customers, health, work_orders
from config.settings import Settings, get_settings
from constants import HTTPStatus
from database import make_engine, make_session_factory
from domain.exceptions import DomainError
from exceptions import ApplicationError, ConfigurationError, ValidationError
from init_db import init_database
from utils.logging_utils import clear_logging_context, configure_logging, set_logging_context

logger = logging.getLogger(__name__)


def validation_problem(exc: RequestValidationError) -> dict:
    """
    Problem-details body for a rejected request.

    Errors are grouped by field path, without the leading body/query/path
    location.
    """
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else (loc[0] if loc else "request")
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return {
        "title": "Validation failed",
        "status": HTTPStatus.BAD_REQUEST,
        "detail": "One or more validation errors occurred.",
        "errors": errors,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    logger.info(f"Starting {app.state.settings.app_name} ({app.state.settings.environment})")
    init_database(app.state.engine)

    yield

    app.state.engine.dispose()
    logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to run with; read from the environment when omitted

    Returns:
        Configured application; tables are created when it starts

    Raises:
        ConfigurationError: If the paging settings contradict each other
    """
    settings = settings or get_settings()
    if settings.default_page_size > settings.max_page_size:
        raise ConfigurationError(
            "default_page_size must not exceed max_page_size",
            keys=["default_page_size", "max_page_size"]
        )

    log_file = configure_logging(settings)
    logger.info(f"Logging initialized: {log_file or 'console'}")

    app = FastAPI(
        title=settings.app_name,
        description="Customers, appointments and work orders for a tailoring shop",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan
    )

    engine = make_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count", "X-Request-ID"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        set_logging_context(request_id=request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            clear_logging_context()
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{time.perf_counter() - start:.4f}"
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path} - Validation failed: {exc.errors()}")
        return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content=validation_problem(exc))

    # Raised outside a decorated route, e.g. by the paging dependency
    @app.exception_handler(ValidationError)
    async def application_validation_handler(request: Request, exc: ValidationError):
        logger.warning(f"{request.method} {request.url.path} - Validation error: {exc.message}")
        return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logger.warning(f"{request.method} {request.url.path} - Domain rule violated: {exc.message}")
        return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        logger.error(f"{request.method} {request.url.path} - Application error: {exc.message}")
        return JSONResponse(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content={"detail": exc.message})

    # Include API routers
    app.include_router(health.router, tags=["health"])
    app.include_router(customers.router, prefix="/api/customers", tags=["customers"])
    app.include_router(appointments.router, prefix="/api", tags=["appointments"])
    app.include_router(work_orders.router, prefix="/api", tags=["work-orders"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    logger.info(f"Starting {settings.app_name} on http://{settings.api_host}:{settings.api_port}...")
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
