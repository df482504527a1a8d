"""Exception handlers rendering the clipnest error taxonomy as JSON responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clipnest.core.exceptions import ClipnestError, ValidationError
from clipnest.core.logging import get_logger

logger = get_logger("api.errors")


async def clipnest_error_handler(request: Request, exc: ClipnestError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.kind, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    body = ValidationError("; ".join(messages) or None).to_dict()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=ClipnestError().to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClipnestError, clipnest_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
