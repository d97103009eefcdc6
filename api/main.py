import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from core import config, db
from core.error_handlers import register_error_handlers
from core.logging import configure_logging
from students import router as students_router

API_VERSION = "1.0.0"

configure_logging(config.log_level())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process; routes reach it through `db.get_database`.
    database = db.Database(
        config.database_url(),
        max_size=config.db_pool_size(),
        command_timeout=config.db_command_timeout(),
    )
    await database.connect()
    app.state.db = database
    try:
        yield
    finally:
        await database.close()


app = FastAPI(title="Student Records API", version=API_VERSION, lifespan=lifespan)

register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        # Answered with a 500 by the outermost error middleware.
        _log_request(request, 500, started)
        raise
    _log_request(request, response.status_code, started)
    return response


def _log_request(request: Request, status_code: int, started: float) -> None:
    logger.info(
        "request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        status_code,
        (time.perf_counter() - started) * 1000,
    )


app.include_router(students_router.router, tags=["students"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {
        "message": "Welcome to the College Management System API!",
        "version": API_VERSION,
        "documentation": "Student records are served under /students",
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.server_port())
