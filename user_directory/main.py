import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_directory.api.v1.endpoints import users
from user_directory.core.config import Settings
from user_directory.core.exception_handlers import setup_exception_handlers
from user_directory.core.security import PasswordHasher
from user_directory.db.base import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Opens the database handle on startup and closes it on shutdown."""
    database: Database = app.state.database
    database.open()
    logger.info("User directory started")

    yield  # Let FastAPI start

    # Cleanup on shutdown
    database.close()
    logger.info("User directory stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="UserDirectoryAPI", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.include_router(users.router, prefix="/users", tags=["users"])
    setup_exception_handlers(app)

    # CORS (Allow frontend access)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"message": "User directory API is running!"}

    @app.get("/health")
    def health():
        app.state.database.ping()
        return {"status": "ok"}

    return app


# Run with: uvicorn user_directory.main:app --host 0.0.0.0 --port 8000
app = create_app()
