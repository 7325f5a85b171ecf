import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlstudio.config import Settings, get_settings
from sqlstudio.core.redis import close_redis, connect_redis
from sqlstudio.database import Database
from sqlstudio.logging_config import init_logging
from sqlstudio.routers import assignments, auth, execute, hint, users
from sqlstudio.services.hint_service import HintProvider

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    init_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(
            settings.database_url,
            settings.sandbox_database_url or None,
            echo=settings.database_echo,
        )
        app.state.database = database
        logger.info("Database engine ready: %s", database.engine.url.render_as_string(hide_password=True))
        if settings.seed_on_startup:
            from sqlstudio.seed import seed
            seed(database)
        app.state.redis = await connect_redis(settings)
        try:
            yield
        finally:
            await close_redis(app.state.redis)
            app.state.redis = None
            database.dispose()

    app = FastAPI(title="SQL Studio API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.hint_provider = HintProvider(settings)
    app.state.redis = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Browser client reads "error"; keep "detail" for FastAPI conventions
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": message, "error": message},
        )

    app.include_router(assignments.router)
    app.include_router(auth.router)
    app.include_router(execute.router)
    app.include_router(users.router)
    app.include_router(hint.router)

    @app.get("/")
    def root():
        return {"message": "SQL Studio API", "docs": "/docs"}

    @app.get("/api/health")
    def health(request: Request):
        ok = request.app.state.database.ping()
        return JSONResponse(
            status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"database": "ok" if ok else "unavailable"},
        )

    return app


app = create_app()
