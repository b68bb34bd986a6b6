"""주문상품 모델"""
from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from shop.database import Base


class OrderItem(Base):
    """
    주문 한 건의 상품 라인

    주문(Order)으로의 참조는 외래키(order_id)만 가진다. Order.order_items가 유일한 탐색 방향.
    order_price는 주문 시점 가격 (이후 상품 가격이 바뀌어도 유지).
    """

    __tablename__ = "order_item"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("item.id"), nullable=False, index=True)

    order_price = Column(Integer, nullable=False)  # 주문 가격
    count = Column(Integer, nullable=False)        # 주문 수량

    # Relationships (LAZY)
    item = relationship("Item", lazy="select")

    def __repr__(self):
        return f"<OrderItem(id={self.id}, item={self.item_id}, price={self.order_price}, count={self.count})>"

    # ─── 생성 메서드 ───

    @classmethod
    def create_order_item(cls, item, order_price: int, count: int) -> "OrderItem":
        """주문상품 생성 + 재고 차감"""
        item.remove_stock(count)
        return cls(item=item, order_price=order_price, count=count)

    # ─── 비즈니스 로직 ───

    def cancel(self):
        """주문 취소 시 재고 원복"""
        self.item.add_stock(self.count)

    @property
    def total_price(self) -> int:
        """주문상품 전체 가격 (주문 가격 × 수량)"""
        return self.order_price * self.count
