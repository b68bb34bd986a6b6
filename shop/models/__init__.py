"""SQLAlchemy 모델"""
from shop.models.address import Address
from shop.models.member import Member
from shop.models.item import Item, Book, Album, Movie, ITEM_TYPES
from shop.models.delivery import Delivery, DeliveryStatus
from shop.models.order_item import OrderItem
from shop.models.order import Order, OrderStatus

__all__ = [
    "Address",
    "Member",
    "Item",
    "Book",
    "Album",
    "Movie",
    "ITEM_TYPES",
    "Delivery",
    "DeliveryStatus",
    "OrderItem",
    "Order",
    "OrderStatus",
]
