"""상품 모델 (도서 / 음반 / 영화)"""
from sqlalchemy import Column, Integer, String

from shop.constants import ITEM_TYPE_ALBUM, ITEM_TYPE_BOOK, ITEM_TYPE_MOVIE, MAX_NAME_LENGTH
from shop.database import Base
from shop.exceptions import InvalidArgumentError, NotEnoughStockError


class Item(Base):
    """
    상품 공통 필드

    단일 테이블 전략: dtype 컬럼(B/A/M)으로 하위 타입을 명시적으로 구분한다.
    하위 타입은 Book, Album, Movie 세 가지로 닫혀 있으며 Item 자체는 저장하지 않는다.

    version 컬럼은 낙관적 락. 재고를 동시에 고치면 늦게 커밋한 쪽이 StaleDataError.
    """

    __tablename__ = "item"

    id = Column(Integer, primary_key=True, index=True)
    dtype = Column(String(1), nullable=False, index=True)

    name = Column(String(MAX_NAME_LENGTH), nullable=False)
    price = Column(Integer, nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)

    version = Column(Integer, nullable=False)

    __mapper_args__ = {
        "polymorphic_on": dtype,
        "version_id_col": version,
    }

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, name='{self.name}', stock={self.stock_quantity})>"

    # ─── 비즈니스 로직 ───

    def add_stock(self, quantity: int):
        """재고 증가"""
        if quantity < 0:
            raise InvalidArgumentError(f"재고 증가 수량은 음수일 수 없습니다: {quantity}")
        self.stock_quantity += quantity

    def remove_stock(self, quantity: int):
        """재고 감소 (부족하면 NotEnoughStockError, 0 미만으로 깎지 않음)"""
        if quantity < 0:
            raise InvalidArgumentError(f"재고 감소 수량은 음수일 수 없습니다: {quantity}")
        rest = self.stock_quantity - quantity
        if rest < 0:
            raise NotEnoughStockError(
                f"재고가 부족합니다 (상품 {self.id}: 재고 {self.stock_quantity}, 요청 {quantity})"
            )
        self.stock_quantity = rest


class Book(Item):
    """도서"""
    author = Column(String(100))
    isbn = Column(String(20))

    __mapper_args__ = {"polymorphic_identity": ITEM_TYPE_BOOK}


class Album(Item):
    """음반"""
    artist = Column(String(100))
    etc = Column(String(200))

    __mapper_args__ = {"polymorphic_identity": ITEM_TYPE_ALBUM}


class Movie(Item):
    """영화"""
    director = Column(String(100))
    actor = Column(String(200))

    __mapper_args__ = {"polymorphic_identity": ITEM_TYPE_MOVIE}


# dtype → 하위 타입
ITEM_TYPES = {
    ITEM_TYPE_BOOK: Book,
    ITEM_TYPE_ALBUM: Album,
    ITEM_TYPE_MOVIE: Movie,
}
