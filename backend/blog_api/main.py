import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import APIRouter, FastAPI
from fastapi.concurrency import run_in_threadpool

from .audit.service import EventLogger
from .auth.tokens import TokenAuthenticator
from .core.database import build_engine
from .core.logging import configure_logging
from .core.middleware import install_middleware
from .core.migrate import MigrationRunner
from .core.settings import Settings, settings

from .auth.router import router as auth_router
from .users.router import router as users_router
from .posts.router import router as posts_router
from .comments.router import router as comments_router

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # raises on an empty JWT_SECRET
        authenticator = TokenAuthenticator(
            app_settings.JWT_SECRET,
            ttl=timedelta(hours=app_settings.JWT_EXPIRY_HOURS),
            algorithm=app_settings.JWT_ALGORITHM,
            issuer=app_settings.JWT_ISSUER,
        )
        engine = build_engine(app_settings.DATABASE_URL)
        # FatalMigrationError propagates and aborts startup
        logger.info("Running database migrations...")
        try:
            MigrationRunner(engine, app_settings.MIGRATIONS_DIR).run()
            logger.info("Database migrations completed successfully")

            event_logger = EventLogger(
                app_settings.EVENT_LOG_PATH,
                capacity=app_settings.EVENT_LOG_CAPACITY,
                throttle_seconds=app_settings.EVENT_LOG_THROTTLE_SECONDS,
            )
            event_logger.start()
        except Exception:
            engine.dispose()
            raise

        app.state.engine = engine
        app.state.event_logger = event_logger
        app.state.authenticator = authenticator
        try:
            yield
        finally:
            logger.info("Shutting down...")
            # stop() blocks until the queue is drained
            await run_in_threadpool(event_logger.stop)
            engine.dispose()

    app = FastAPI(title=app_settings.PROJECT_NAME, lifespan=lifespan)
    install_middleware(app, app_settings.CORS_ALLOW_ORIGINS)

    api_router = APIRouter(prefix="/api")

    @api_router.get("/health")
    def health():
        return {"status": "ok"}

    api_router.include_router(auth_router)
    api_router.include_router(users_router)
    api_router.include_router(posts_router)
    api_router.include_router(comments_router)
    app.include_router(api_router)
    return app


app = create_app()
