"""API 의존성 (요청마다 세션 하나, 서비스는 그 세션을 공유)"""
from fastapi import Depends
from sqlalchemy.orm import Session

from shop.database import get_db
from shop.services import ItemService, MemberService, OrderQueryService, OrderService


def get_member_service(db: Session = Depends(get_db)) -> MemberService:
    return MemberService(db)


def get_item_service(db: Session = Depends(get_db)) -> ItemService:
    return ItemService(db)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_order_query_service(db: Session = Depends(get_db)) -> OrderQueryService:
    return OrderQueryService(db)
