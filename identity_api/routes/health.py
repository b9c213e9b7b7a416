from collections.abc import Callable

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from identity_api import redis_client
from identity_api import db
from identity_api.config import settings

router = APIRouter(tags=["health"])
log = structlog.get_logger()

def readiness_checks() -> dict[str, Callable[[], bool]]:
    # redis only backs the auth rate limiter, which fails open
    checks: dict[str, Callable[[], bool]] = {"db": db.db_ping}
    if settings.rate_limit_enabled:
        checks["redis"] = redis_client.redis_ping
    return checks

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

@router.get("/ready")
def ready() -> JSONResponse:
    results: dict[str, bool] = {}
    errors: dict[str, str] = {}

    for name, check in readiness_checks().items():
        try:
            results[name] = bool(check())
        except Exception as e:
            results[name] = False
            errors[name] = e.__class__.__name__

    ok = all(results.values())
    if not ok:
        log.warning("ready.failed", checks=results, errors=errors)

    body: dict = {"status": "ok" if ok else "unready", "checks": results}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=200 if ok else 503, content=body)
