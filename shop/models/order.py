"""주문 모델"""
import enum
from datetime import datetime
from typing import Iterable

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer
from sqlalchemy.orm import relationship

from shop.database import Base


class OrderStatus(str, enum.Enum):
    """주문 상태 (ORDER → CANCEL, CANCEL은 종료 상태)"""
    ORDER = "ORDER"
    CANCEL = "CANCEL"


class Order(Base):
    """
    주문

    연관관계는 모두 지연 로딩(lazy="select"). 어떤 방식으로 미리 가져올지는
    조회 쪽(OrderRepository / OrderQueryService)에서 쿼리마다 정한다.
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("member.id"), nullable=False, index=True)
    delivery_id = Column(Integer, ForeignKey("delivery.id"), unique=True)

    order_date = Column(DateTime, nullable=False, default=datetime.now)
    status = Column(Enum(OrderStatus, native_enum=False, length=10), nullable=False, index=True)

    # Relationships
    member = relationship("Member", lazy="select")
    delivery = relationship("Delivery", lazy="select", cascade="all")
    order_items = relationship(
        "OrderItem",
        lazy="select",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Order(id={self.id}, member={self.member_id}, status={self.status})>"

    # ─── 생성 메서드 ───

    @classmethod
    def create_order(cls, member, delivery, order_items: Iterable) -> "Order":
        """주문 생성 (상태 ORDER, 주문일시 현재)"""
        order = cls(
            member=member,
            delivery=delivery,
            status=OrderStatus.ORDER,
            order_date=datetime.now(),
        )
        for order_item in order_items:
            order.order_items.append(order_item)
        return order

    # ─── 비즈니스 로직 ───

    def cancel(self) -> bool:
        """
        주문 취소

        이미 취소된 주문이면 아무것도 하지 않는다 (재고 중복 복원 방지).

        Returns:
            상태가 실제로 바뀌었는지 여부
        """
        if self.status == OrderStatus.CANCEL:
            return False

        for order_item in self.order_items:
            order_item.cancel()
        self.status = OrderStatus.CANCEL
        return True

    # ─── 조회 로직 ───

    @property
    def total_price(self) -> int:
        """전체 주문 가격 (주문상품 가격 × 수량의 합)"""
        return sum(order_item.total_price for order_item in self.order_items)
