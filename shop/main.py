"""
쇼핑몰 주문 API 서버
==================
회원 / 상품 / 주문 API와 주문 목록 조회 방식별(v1 ~ v6) 비교 엔드포인트

사용법:
    uvicorn shop.main:app --reload
    python -m shop.main

    GET /                   버전, 문서 경로, 지원하는 조회 방식
    GET /health             DB 연결 확인 (실패 시 503)
    GET /api/orders?strategy=batch&offset=0&limit=10
"""
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shop import __version__
from shop.api import items, members, orders, simple_orders
from shop.api.exception_handlers import configure_exception_handlers
from shop.config import settings
from shop.database import engine, get_db, init_db
from shop.services import FetchStrategy

# 로깅 설정
logging.basicConfig(
    level=settings.log_level,
    format='[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)

ROUTERS = (members.router, items.router, orders.router, simple_orders.router)


def _cors_origins():
    """쉼표 구분 설정값 → 목록 (없으면 전체 허용)"""
    if not settings.cors_origins:
        return ["*"]
    return [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


app = FastAPI(
    title=settings.api_title,
    description="회원 / 상품 / 주문 API (주문 목록 조회 방식별 비교)",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

configure_exception_handlers(app)

for router in ROUTERS:
    app.include_router(router)


# ─── 수명 주기 ───

@app.on_event("startup")
async def startup_event():
    logger.info(f"주문 API 시작 (v{__version__}, DB: {engine.dialect.name})")
    init_db()
    logger.info(
        f"테이블 준비 완료, batch_fetch_size={settings.batch_fetch_size}, "
        f"max_search_results={settings.max_search_results}"
    )


@app.on_event("shutdown")
async def shutdown_event():
    engine.dispose()
    logger.info("주문 API 종료, 커넥션 풀 해제")


# ─── 공통 엔드포인트 ───

@app.get("/")
async def root():
    """버전, 문서 경로, 주문 목록 조회 방식"""
    return {
        "message": settings.api_title,
        "version": __version__,
        "docs": "/docs",
        "order_strategies": [strategy.value for strategy in FetchStrategy],
    }


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """헬스 체크 (SELECT 1)"""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"헬스 체크 DB 오류: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "unavailable"})
    return {"status": "healthy", "database": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "shop.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
