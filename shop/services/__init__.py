"""서비스 모듈"""
from shop.services.transaction_manager import atomic_session, transactional
from shop.services.member_service import MemberService
from shop.services.item_service import ItemService
from shop.services.order_service import OrderService
from shop.services.order_query_service import FetchStrategy, OrderQueryService

__all__ = [
    'atomic_session',
    'transactional',
    'MemberService',
    'ItemService',
    'OrderService',
    'FetchStrategy',
    'OrderQueryService',
]
