"""애플리케이션 설정"""
from pydantic_settings import BaseSettings
from typing import Optional

from shop.constants import DEFAULT_BATCH_FETCH_SIZE, DEFAULT_PAGE_LIMIT, MAX_SEARCH_RESULTS


class Settings(BaseSettings):
    """환경변수 기반 설정"""

    # Database
    database_url: Optional[str] = None  # 없으면 프로젝트 루트의 shop.db
    sql_echo: bool = False

    # 조회 최적화
    batch_fetch_size: int = DEFAULT_BATCH_FETCH_SIZE  # IN 절 하나에 담을 주문 수 (100~1000 권장)
    max_search_results: int = MAX_SEARCH_RESULTS  # 엔티티 검색 최대 건수
    default_page_limit: int = DEFAULT_PAGE_LIMIT

    # Logging
    log_level: str = "INFO"

    # API
    api_title: str = "Shop API"
    cors_origins: Optional[str] = None  # 쉼표 구분, 없으면 전체 허용

    class Config:
        env_file = ".env"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()
