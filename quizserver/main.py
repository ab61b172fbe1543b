import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.cors import setup_cors
from .core.logging import configure_logging
from .core.templates import STATIC_DIR
from .api.routers import quizzes as quizzes_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)
setup_cors(app)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

app.include_router(quizzes_router.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s - Status: %d - Duration: %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        time.perf_counter() - start,
    )
    return response


# errors go out as plain text carrying the underlying message
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(f"Internal server error: {exc}", status_code=500)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    logger.info(
        "Server starting at http://%s:%d (env: %s, storage: %s)",
        settings.BACKEND_HOST,
        settings.BACKEND_PORT,
        settings.APP_ENV,
        settings.STORAGE_BACKEND,
    )
    uvicorn.run(
        "quizserver.main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
