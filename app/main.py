import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.core.exceptions import SwarshError, StorageError, ValidationError
from app.realtime.notifier import RealtimeNotifier
from app.realtime.registry import ConnectionRegistry
from app.api.auth import router as auth_router
from app.api.users import router as users_router
from app.api.swipe import router as swipe_router
from app.api.invite import router as invite_router
from app.api.messages import router as messages_router
from app.api.realtime import router as realtime_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Swarsh API...")
    yield
    logger.info("Shutting down Swarsh API...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Swarsh API",
        docs_url="/docs" if not settings.APP_DOMAIN else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    registry = ConnectionRegistry()
    app.state.registry = registry
    app.state.notifier = RealtimeNotifier(registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SwarshError)
    async def swarsh_error_handler(request: Request, exc: SwarshError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        error = ValidationError(details or None)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Unhandled storage error")
        error = StorageError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    # Include routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(swipe_router)
    app.include_router(invite_router)
    app.include_router(messages_router)
    app.include_router(realtime_router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "online": len(registry)}

    @app.get("/")
    async def root():
        return {"message": "Swarsh API", "version": "1.0"}

    return app


app = create_app()
