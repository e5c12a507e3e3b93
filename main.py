import uvicorn
import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from ide_sync.api.resolve import router as resolve_router, get_project_data_manager
from ide_sync.core.config import LOG_DIR, LOG_LEVEL
from ide_sync.utils.logging_config import setup_logging

setup_logging(level=getattr(logging, LOG_LEVEL, logging.INFO), log_dir=LOG_DIR)
logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    project_data = get_project_data_manager().load()
    if project_data is None:
        logger.warning("No project data at startup — resolution disabled until PUT /project")
    yield


app = FastAPI(title="IDE Sync Path Resolver", lifespan=lifespan)

# ---------------------------------------------------------------------------
# Request logging: one line per request, /health only at debug level
# ---------------------------------------------------------------------------
_QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.DEBUG if request.url.path in _QUIET_PATHS else logging.INFO
        logger.log(
            level, "%s %s -> %d (%.1fms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

app.add_middleware(RequestLoggingMiddleware)

# Health endpoint
@app.get("/health")
async def health_check():
    return {"status": "ok"}

app.include_router(resolve_router)

if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
