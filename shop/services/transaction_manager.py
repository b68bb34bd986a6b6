"""
트랜잭션 관리 모듈
==================
작업 단위(unit of work) 보장: 세션 하나 안의 변경을 한 번에 커밋하거나 전부 롤백

사용법:
    with atomic_session(db) as session:
        order.cancel()
    # 여기서 자동 커밋 또는 롤백

    class OrderService:
        @transactional
        def cancel_order(self, order_id): ...   # self.db 세션 사용
"""
import functools
import logging
from contextlib import contextmanager
from typing import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from shop.exceptions import ConflictError, ShopError

logger = logging.getLogger(__name__)


@contextmanager
def atomic_session(session: Session):
    """
    원자적 작업을 보장하는 컨텍스트 매니저

    성공 시 자동 커밋, 실패 시 자동 롤백 후 예외 재발생.
    재고와 주문 상태가 따로 반영되는 일이 없도록 한 블록 안에서 함께 커밋한다.

    Args:
        session: SQLAlchemy 세션

    Yields:
        Session: 같은 세션

    Raises:
        ConflictError: 낙관적 락 충돌 (다른 요청이 같은 상품 재고를 먼저 수정)
        ShopError: 비즈니스 오류 (롤백 후 그대로 전달)
        SQLAlchemyError: 데이터베이스 오류 (롤백 후)
    """
    try:
        yield session
        session.commit()
        logger.debug("트랜잭션 커밋 완료")
    except StaleDataError as e:
        session.rollback()
        logger.warning(f"동시 수정 충돌로 롤백: {e}")
        raise ConflictError("다른 요청이 먼저 데이터를 수정했습니다. 다시 시도해 주세요.") from e
    except ShopError as e:
        session.rollback()
        logger.info(f"비즈니스 오류로 롤백: {e}")
        raise
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"무결성 오류로 롤백: {e}")
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"DB 오류로 롤백: {e}")
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"예상치 못한 오류로 롤백: {e}")
        raise


def transactional(func: Callable) -> Callable:
    """
    서비스 메서드를 작업 단위로 감싸는 데코레이터

    서비스 인스턴스의 self.db 세션을 사용한다. 트랜잭션 메서드끼리 중첩 호출하지 않는다.
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        with atomic_session(self.db):
            return func(self, *args, **kwargs)
    return wrapper
