"""공통 리포지토리 (기본 CRUD)"""
import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    엔티티 하나에 대한 기본 CRUD

    커밋은 하지 않는다. 트랜잭션 경계는 서비스 계층(atomic_session)이 정한다.
    """

    model: Type[T]

    def __init__(self, db: Session):
        self.db = db

    def save(self, entity: T) -> T:
        """저장 (flush 후 id 할당)"""
        self.db.add(entity)
        self.db.flush()
        return entity

    def find_one(self, entity_id: int) -> Optional[T]:
        """id로 단건 조회 (없으면 None)"""
        return self.db.get(self.model, entity_id)

    def find_all(self) -> List[T]:
        """전체 조회 (id 순)"""
        return self.db.query(self.model).order_by(self.model.id).all()

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).scalar()

    def delete(self, entity: T):
        """관리용 삭제 (물리 삭제)"""
        logger.info(f"삭제: {entity!r}")
        self.db.delete(entity)
        self.db.flush()
