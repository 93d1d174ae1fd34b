"""Exception handlers — turn QPlanError into the JSON shape the UI toasts from."""
import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from qplan.exceptions import QPlanError, StoreUnavailable

logger = logging.getLogger(__name__)


def error_body(exc: QPlanError) -> dict:
    return {
        "success": False,
        "message": exc.message,
        "error": {"code": exc.code},
    }


async def qplan_exception_handler(request: Request, exc: QPlanError) -> JSONResponse:
    if isinstance(exc, StoreUnavailable):
        logger.error("Store unavailable on %s %s", request.method, request.url.path)
    else:
        logger.info("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))
