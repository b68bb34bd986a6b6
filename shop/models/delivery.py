"""배송 모델"""
import enum

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import composite

from shop.database import Base
from shop.models.address import Address


class DeliveryStatus(str, enum.Enum):
    """배송 상태"""
    READY = "READY"  # 준비
    COMP = "COMP"    # 배송 완료


class Delivery(Base):
    """배송 정보 (주문과 1:1, 외래키는 orders.delivery_id)"""

    __tablename__ = "delivery"

    id = Column(Integer, primary_key=True, index=True)

    city = Column(String(100))
    street = Column(String(200))
    zipcode = Column(String(20))
    address = composite(Address, city, street, zipcode)

    status = Column(Enum(DeliveryStatus, native_enum=False, length=10), nullable=False, default=DeliveryStatus.READY)

    def __repr__(self):
        return f"<Delivery(id={self.id}, status={self.status})>"
