"""
User accounts service — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI

from api.exception_handlers import setup_exception_handlers
from api.middleware import register_middleware
from api.routes import router as users_router
from auth.routes import router as auth_router
from config.settings import config
from database.session import init_db

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiosqlite", "sqlalchemy.engine", "multipart", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="User Accounts Service",
        version="1.0.0",
        description="User registration, login and user management.",
    )

    register_middleware(app)
    setup_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(users_router, prefix="/users")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    @app.on_event("startup")
    async def on_startup():
        logger.info("Ensuring database schema…")
        await init_db()
        logger.info("Application ready to accept requests.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
