"""FastAPI exception handlers for the shared error taxonomy"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import CommerceError, PayloadValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Render errors as {"error": kind, "message": ...} with the error's status"""

    @app.exception_handler(CommerceError)
    async def commerce_error_handler(request: Request, exc: CommerceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(f"{request.method} {request.url.path}: invalid request body")
        error = PayloadValidationError("Invalid request body")
        content = error.to_dict()
        content["details"] = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=error.status_code, content=content)
