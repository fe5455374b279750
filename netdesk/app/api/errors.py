"""
Error responses for finance-core failures.

The finance core raises `InvalidAmount` and never logs or recovers; this is
where it becomes a client-facing validation error.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from netdesk.app.finance.money import InvalidAmount

logger = logging.getLogger(__name__)


async def invalid_amount_handler(request: Request, exc: InvalidAmount) -> JSONResponse:
    logger.warning("Rejected %s on %s: %s", exc.field, request.url.path, exc.reason)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "ERR_INVALID_AMOUNT",
            "message": str(exc),
            "details": {"field": exc.field, "reason": exc.reason},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidAmount, invalid_amount_handler)
