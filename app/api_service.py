from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import settings
from messaging.errors import GatewayError, InvalidArgumentError
from ops.structured_logger import setup_logging
from utils.request_context import request_id_scope

from app.routers.health import router as health_router
from app.routers.sms import close_dispatcher, router as sms_router

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_dispatcher()


app = FastAPI(title="smsgate API", version="1.0.0", lifespan=lifespan)
log = logging.getLogger("smsgate.api")


def _get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id") or ""


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    with request_id_scope(rid):
        response = await call_next(request)
    response.headers["X-Request-Id"] = rid
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    rid = _get_request_id(request)
    log.warning(
        "http_exception",
        extra={
            "extra": {
                "event": "http_exception",
                "status_code": exc.status_code,
                "detail": exc.detail,
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "request_id": rid})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    rid = _get_request_id(request)
    log.warning(
        "validation_error",
        extra={"extra": {"event": "validation_error", "path": request.url.path, "method": request.method, "request_id": rid}},
    )
    return JSONResponse(status_code=422, content={"detail": exc.errors(), "request_id": rid})


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    rid = _get_request_id(request)
    log.warning(
        "invalid_argument",
        extra={
            "extra": {
                "event": "invalid_argument",
                "error": str(exc),
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(status_code=400, content={"detail": str(exc), "request_id": rid})


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    rid = _get_request_id(request)
    log.warning(
        "gateway_error",
        extra={
            "extra": {
                "event": "gateway_error",
                "code": exc.code,
                "provider_message": exc.message,
                "path": request.url.path,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=502,
        content={"detail": "gateway_error", "code": exc.code, "message": exc.message, "request_id": rid},
    )


@app.exception_handler(httpx.HTTPError)
async def transport_error_handler(request: Request, exc: httpx.HTTPError):
    rid = _get_request_id(request)
    log.error(
        "gateway_transport_error",
        extra={
            "extra": {
                "event": "gateway_transport_error",
                "error_type": type(exc).__name__,
                "error": str(exc),
                "path": request.url.path,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(status_code=504, content={"detail": "gateway_transport_error", "request_id": rid})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _get_request_id(request)
    log.error(
        "internal_unhandled_exception",
        extra={
            "extra": {
                "event": "internal_unhandled_exception",
                "error_type": type(exc).__name__,
                "error": str(exc),
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"error": "internal_unhandled_exception", "request_id": rid})


app.include_router(health_router, tags=["health"])
app.include_router(sms_router, prefix="/api", tags=["sms"])
