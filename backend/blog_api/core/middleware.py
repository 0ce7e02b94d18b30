import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def recover_and_log(request: Request, call_next):
    """
    Access log for every request. Any exception escaping a handler is logged
    and turned into a generic 500 response.
    """
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error during %s %s", request.method, request.url.path)
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
    client = request.client.host if request.client else "-"
    logger.info(
        "%s | %s %s | %d | %.3fms",
        client,
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - start) * 1000,
    )
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation error: invalid input",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def install_middleware(app: FastAPI, allow_origins: list[str]) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.middleware("http")(recover_and_log)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
