"""데이터베이스 연결 및 세션 관리

URL 결정 순서:
  - 환경변수 DATABASE_URL
  - shop 설정(.env)의 database_url
  - 없으면 로컬 SQLite 파일

요청 하나 = 세션 하나 = 작업 단위(unit of work).
세션이 닫힌 뒤에는 지연 로딩이 동작하지 않으므로 응답 DTO는 세션 안에서 만든다.
"""
import os
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

_logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent


# ─── URL 결정 ───

def _resolve_database_url() -> str:
    """DATABASE_URL 결정: 환경변수 → 설정 → 로컬 SQLite 순"""

    # 1) 환경변수
    url = os.environ.get("DATABASE_URL")
    if url:
        return url

    # 2) shop/config.py 설정
    from shop.config import settings
    if settings.database_url:
        return settings.database_url

    # 3) 기본 로컬 SQLite
    db_path = ROOT / "shop.db"
    return f"sqlite:///{db_path}"


def _is_sqlite(url: str) -> bool:
    """SQLite 여부 판별"""
    return url.startswith("sqlite:")


def _is_sqlite_memory(url: str) -> bool:
    """인메모리 SQLite 여부 판별 (sqlite:// 또는 :memory:)"""
    return url in ("sqlite://", "sqlite:///:memory:") or url.endswith(":memory:")


# 커넥션 info에 붙는 활성 QueryCounter 목록 키
_COUNTERS_KEY = "shop_query_counters"


def _record_statement(conn, cursor, statement, parameters, context, executemany):
    """before_cursor_execute: 이 커넥션에 걸린 카운터에만 기록"""
    for counter in conn.info.get(_COUNTERS_KEY, ()):
        counter.statements.append(statement)


def create_engine_for_url(url: str, echo: bool = False) -> Engine:
    """URL에 따라 적절한 엔진 생성 (쿼리 수 측정 리스너 포함)"""
    if _is_sqlite(url):
        kwargs = {
            "connect_args": {"check_same_thread": False},
            "echo": echo,
        }
        if _is_sqlite_memory(url):
            # 인메모리 DB는 커넥션마다 별개 DB가 되므로 커넥션 하나를 공유
            kwargs["poolclass"] = StaticPool
        eng = create_engine(url, **kwargs)

        # SQLite는 외래키 제약이 기본 비활성
        @event.listens_for(eng, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        _logger.info("외부 DB 엔진으로 연결합니다.")
        eng = create_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
        )

    # 리스너는 엔진당 하나, 측정 대상은 커넥션 info로 구분
    event.listen(eng, "before_cursor_execute", _record_statement)
    return eng


def create_session_factory(bind: Engine) -> sessionmaker:
    """세션 팩토리 생성

    expire_on_commit=False: 커밋 후에도 이미 로딩된 속성은 그대로 읽을 수 있음
    (지연 로딩 대상 연관관계는 여전히 세션 안에서만 초기화 가능)
    """
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


# ─── 모듈 레벨 전역 엔진 ───

def _sql_echo() -> bool:
    from shop.config import settings
    return settings.sql_echo


_database_url = _resolve_database_url()
engine = create_engine_for_url(_database_url, echo=_sql_echo())
_logger.info("DB 엔진 생성: %s", "SQLite" if _is_sqlite(_database_url) else engine.dialect.name)

# 세션 팩토리
SessionLocal = create_session_factory(engine)

# 베이스 클래스
Base = declarative_base()


def get_db():
    """데이터베이스 세션 의존성"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """데이터베이스 초기화 (테이블 생성)"""
    # 매퍼 등록을 위해 모델 import
    import shop.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


# ─── 쿼리 수 측정 ───

class QueryCounter:
    """
    세션 하나가 실행한 SQL 문 수 측정

    N+1 문제 확인용. 세션의 커넥션 info에 자신을 걸어 두면
    엔진의 before_cursor_execute 리스너가 그 커넥션에서 나간 문장만 기록한다.
    다른 세션(다른 스레드의 요청 포함)이 실행한 쿼리는 세지 않는다.
    구간 안에서 커밋하면 커넥션이 반납되므로 조회 구간에만 사용한다.

    Usage:
        with QueryCounter(db) as counter:
            service.list_orders(...)
        print(counter.count, counter.statements)
    """

    def __init__(self, session: Session):
        self.session = session
        self.statements: List[str] = []
        self._counters = None

    @property
    def count(self) -> int:
        return len(self.statements)

    def __enter__(self) -> "QueryCounter":
        # 세션 트랜잭션이 잡고 있는 커넥션 (없으면 여기서 시작)
        connection = self.session.connection()
        self._counters = connection.info.setdefault(_COUNTERS_KEY, [])
        self._counters.append(self)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._counters is not None and self in self._counters:
            self._counters.remove(self)
        self._counters = None
        return False


@contextmanager
def count_queries(session: Session, label: str):
    """세션 단위로 쿼리 수를 세고 debug 로그로 남김"""
    with QueryCounter(session) as counter:
        yield counter
    _logger.debug(f"[{label}] 실행 쿼리 {counter.count}건")
