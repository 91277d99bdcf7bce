# FastAPI entry point
# - Beanie ODM initialization (MongoDB) in the lifespan; an unreachable database aborts startup
# - router registration
# - CORS
# - error rendering: every error body is {"message": ...}

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import pydantic
import uvicorn
from beanie import init_beanie
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .api.v1.auth import router as auth_router
from .api.v1.entries import expense_router, income_router
from .core.config import Settings
from .core.exceptions import FinTrackError
from .models.entry import Expense, Income
from .models.user import User

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [User, Income, Expense]


async def connect_database(settings: Settings) -> AsyncIOMotorDatabase:
    client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000)
    # fail here rather than on the first request
    await client.admin.command("ping")
    return client.get_default_database()


def create_app(settings: Settings, database: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """Build the application around one Settings instance.

    ``database`` replaces the connection made from ``settings.MONGODB_URI``
    (tests pass an in-memory database here).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database
        if db is None:
            try:
                db = await connect_database(settings)
            except Exception as e:
                logger.critical(f"MongoDB connection failed: {e}")
                raise
            logger.info(f"MongoDB connected: {db.name}")
        await init_beanie(database=db, document_models=DOCUMENT_MODELS)
        yield

    app = FastAPI(
        title="fintrack API",
        description="Personal income / expense tracker",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(FinTrackError)
    async def fintrack_error_handler(request: Request, exc: FinTrackError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Server Error"})

    @app.get("/")
    async def root():
        return {"ok": True, "app": settings.APP_NAME, "time": datetime.utcnow().isoformat()}

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "app": settings.APP_NAME, "version": app.version}

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(income_router, prefix="/api/v1")
    app.include_router(expense_router, prefix="/api/v1")

    return app


def load_settings() -> Settings:
    try:
        return Settings()
    except pydantic.ValidationError as e:
        # missing MONGODB_URI / JWT_SECRET_KEY is fatal
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)


def run():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    settings = load_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
