"""회원 모델"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import composite

from shop.constants import MAX_NAME_LENGTH
from shop.database import Base
from shop.models.address import Address


class Member(Base):
    """
    회원

    주문 목록(orders)은 필드로 두지 않는다 (양방향 연관관계 → 직렬화 무한루프).
    회원의 주문이 필요하면 OrderRepository.find_by_member()로 조회.
    """

    __tablename__ = "member"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(MAX_NAME_LENGTH), nullable=False, index=True)

    # 주소 (임베디드)
    city = Column(String(100))
    street = Column(String(200))
    zipcode = Column(String(20))
    address = composite(Address, city, street, zipcode)

    def __repr__(self):
        return f"<Member(id={self.id}, name='{self.name}')>"
