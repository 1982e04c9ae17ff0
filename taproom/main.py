import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taproom.config import get_settings
from taproom.db import init_db
from taproom.errors import AppError
from taproom.routers import clock, health, settings, status
from taproom.schemas import ErrorCode

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("taproom")


@asynccontextmanager
async def lifespan(_: FastAPI):
    app_settings = get_settings()
    if app_settings.dev_mode:
        await init_db()
        logger.info("Database tables initialized in dev mode.")
    logger.info("Default company timezone: %s", app_settings.default_timezone)
    yield


app = FastAPI(title="Taproom", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(settings.router)
app.include_router(clock.router)
app.include_router(status.router)
app.include_router(health.router)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    correlation_id = request.headers.get("x-correlation-id", str(uuid.uuid4()))
    request.state.request_id = request_id
    request.state.correlation_id = correlation_id
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers["x-request-id"] = request_id
    response.headers["x-correlation-id"] = correlation_id
    logger.info(
        "request_complete",
        extra={
            "request_id": request_id,
            "correlation_id": correlation_id,
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "elapsed_ms": elapsed_ms,
        },
    )
    return response


def _error_response(request: Request, status_code: int, error_code: ErrorCode, user_message: str, developer_message: str):
    correlation_id = getattr(request.state, "correlation_id", str(uuid.uuid4()))
    return JSONResponse(
        status_code=status_code,
        content={
            "errorCode": error_code.value,
            "userMessage": user_message,
            "developerMessage": developer_message,
            "correlationId": correlation_id,
        },
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error_response(request, exc.status_code, exc.error_code, exc.user_message, exc.developer_message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return _error_response(
        request,
        422,
        ErrorCode.validation_error,
        "Some fields are missing or invalid.",
        str(exc.errors()),
    )
