"""
예외 핸들러

서비스/도메인 예외(ShopError)를 JSON 응답으로 바꾼다.

    {"error": "NOT_FOUND", "message": "...", "path": "/api/orders/99"}
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shop.exceptions import ShopError

logger = logging.getLogger(__name__)


async def shop_exception_handler(request: Request, exc: ShopError) -> JSONResponse:
    """ShopError → status_code + {error, message, path}"""
    logger.warning(f"{exc.code}: {exc.message} - {request.method} {request.url.path}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "path": str(request.url.path),
        },
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """앱에 예외 핸들러 등록"""
    app.add_exception_handler(ShopError, shop_exception_handler)
    logger.debug("예외 핸들러 등록 완료")
