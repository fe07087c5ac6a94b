from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback

from app.base.logging_config import error_logger as logger
from app.base.metrics import api_exception_counter
from app.base.models import ErrorCode, OperationResult

ERROR_STATUS_CODES = {
    ErrorCode.SLOT_NOT_FOUND: 404,
    ErrorCode.BOOKING_NOT_FOUND: 404,
    ErrorCode.SLOT_ALREADY_BOOKED: 409,
    ErrorCode.CONCURRENT_BOOKING_CONFLICT: 409,
    ErrorCode.WEEKLY_LIMIT_REACHED: 422,
    ErrorCode.INVALID_STATE_TRANSITION: 422,
    ErrorCode.INVALID_CONFIGURATION: 400,
}


def raise_for_result(result: OperationResult) -> OperationResult:
    """Turns a failed engine result into an HTTPException carrying its code and message."""
    if result.success:
        return result
    raise HTTPException(
        status_code=ERROR_STATUS_CODES.get(result.error_code, 400),
        detail={"code": result.error_code.value, "message": result.error},
    )


def register_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"[HTTPException] {exc.detail} | Path={request.url.path}")
        api_exception_counter.labels(type="http").inc()
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "status_code": exc.status_code},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"[ValidationError] Path={request.url.path} | {exc.errors()}")
        api_exception_counter.labels(type="validation").inc()
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request parameters", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"[UnhandledError] {str(exc)}\n{traceback.format_exc()}")
        api_exception_counter.labels(type="unhandled").inc()
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )
