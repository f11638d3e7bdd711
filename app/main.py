from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.api.v1 import routers
from app.api.v1.errors import register_exception_handlers
import logging
from app.core.config import Settings, get_settings
from app.core.security import build_password_hasher, build_token_issuer
from app.db.session import connect_db_pool, close_db_pool
from app.middleware.auth_middleware import AuthMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db_pool = await connect_db_pool(app.state.settings)
    yield
    await close_db_pool(app.state.db_pool)
    app.state.db_pool = None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="Car Rental API",
        description="Accounts, a car catalog and per-user bookings",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.hasher = build_password_hasher(settings)
    app.state.tokens = build_token_issuer(settings)
    app.state.db_pool = None

    app.add_middleware(AuthMiddleware)
    register_exception_handlers(app)
    app.include_router(routers.router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to Car Rental API"}

    return app


app = create_app()
