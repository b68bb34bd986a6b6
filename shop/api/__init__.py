"""API 라우터"""
from shop.api import items, members, orders, simple_orders

__all__ = ["items", "members", "orders", "simple_orders"]
