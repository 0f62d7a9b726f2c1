"""Application-wide exception handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()

        # An id that is not a number cannot name an existing row
        if any(e["loc"] and e["loc"][0] == "path" for e in errors):
            logger.info("Unresolvable path on %s: %s", request.url.path, errors, extra={"path": request.url.path})
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": "Not Found"},
            )

        # The submitted form goes back untouched so the client can re-display it
        logger.warning("Validation error on %s: %s", request.url.path, errors, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(
                {
                    "detail": [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "message": e["msg"],
                            "type": e["type"],
                        }
                        for e in errors
                    ],
                    "submitted": exc.body,
                }
            ),
        )
