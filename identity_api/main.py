from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from fastapi.responses import PlainTextResponse

from identity_api.auth.deps import get_current_user_id
from identity_api.config import settings
from identity_api.db import init_db
from identity_api.errors import register_exception_handlers
from identity_api.log_config import configure_logging
from identity_api.routes.auth import router as auth_router
from identity_api.routes.health import router as health_router
from identity_api.routes.organisations import router as organisations_router
from identity_api.routes.users import router as users_router

log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db_auto_create:
        init_db()
    log.info("identity-api starting", env=settings.app_env, port=settings.app_port)
    yield
    log.info("identity-api shutting down")

def create_app() -> FastAPI:
    app = FastAPI(title="identity-api", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(organisations_router)
    app.include_router(users_router)

    @app.get("/api/protected", response_class=PlainTextResponse, dependencies=[Depends(get_current_user_id)])
    def protected() -> str:
        return "This is a protected route"

    return app

configure_logging(settings.log_level, settings.log_format)
app = create_app()
