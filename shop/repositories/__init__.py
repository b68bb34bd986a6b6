"""리포지토리 모듈"""
from shop.repositories.base import BaseRepository
from shop.repositories.member_repository import MemberRepository
from shop.repositories.item_repository import ItemRepository
from shop.repositories.order_repository import OrderRepository
from shop.repositories.order_query import OrderQueryRepository
from shop.repositories.order_search import OrderSearch, Page

__all__ = [
    "BaseRepository",
    "MemberRepository",
    "ItemRepository",
    "OrderRepository",
    "OrderQueryRepository",
    "OrderSearch",
    "Page",
]
