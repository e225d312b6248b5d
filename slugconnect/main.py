# main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slugconnect.config import settings
from slugconnect.config import build_sqlalchemy_db_url
from slugconnect.database import Base, engine, mask_db_url
from slugconnect.errors import AuthRequired, SlugConnectError
import slugconnect.models  # noqa: F401  # ensure all models are registered
from slugconnect.api.routes.catalog import router as catalog_router
from slugconnect.api.routes.health import router as health_router
from slugconnect.routers import auth, connections, discover, users


logger = logging.getLogger("slugconnect")


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app() -> FastAPI:
    _configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "startup app=%s environment=%s db_url=%s",
            settings.app_name,
            settings.environment,
            mask_db_url(build_sqlalchemy_db_url(settings)),
        )
        yield
        logger.info("shutdown app=%s", settings.app_name)

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.info(
            "request method=%s path=%s status=%s duration=%.4fs",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
        )
        return response

    @application.exception_handler(SlugConnectError)
    async def slugconnect_error_handler(request: Request, exc: SlugConnectError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("error path=%s status=%s detail=%s", request.url.path, exc.status_code, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthRequired) else None
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(users.router, prefix="/users", tags=["users"])
    application.include_router(discover.router, prefix="/discover", tags=["discover"])
    application.include_router(connections.router, prefix="/connections", tags=["connections"])
    application.include_router(catalog_router, prefix=settings.api_prefix)

    # Never auto-create tables in a shared MySQL database; sqlite is local-only.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
