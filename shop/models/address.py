"""주소 값 타입 (임베디드)"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Address:
    """
    회원/배송 테이블에 city, street, zipcode 컬럼으로 펼쳐 저장되는 값 객체

    별도 테이블이 없으며 composite()로 매핑된다. 값이 같으면 같은 주소.
    """
    city: Optional[str] = None
    street: Optional[str] = None
    zipcode: Optional[str] = None
