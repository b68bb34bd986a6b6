"""상품 서비스"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from shop.exceptions import InvalidArgumentError, NotFoundError
from shop.models import ITEM_TYPES, Item
from shop.repositories.item_repository import ItemRepository
from shop.services.transaction_manager import transactional
from shop.utils.validators import ItemValidator, raise_if_invalid

logger = logging.getLogger(__name__)


class ItemService:
    """상품 등록 / 수정 / 조회"""

    def __init__(self, db: Session):
        self.db = db
        self.item_repository = ItemRepository(db)
        self.validator = ItemValidator()

    def _validate(self, name, price, stock_quantity):
        raise_if_invalid(self.validator.validate({
            "name": name,
            "price": price,
            "stock_quantity": stock_quantity,
        }))

    @transactional
    def save_item(self, item: Item) -> int:
        """상품 등록 (Book / Album / Movie)"""
        if item is None or type(item) not in ITEM_TYPES.values():
            raise InvalidArgumentError("상품은 도서 / 음반 / 영화 중 하나여야 합니다")

        self._validate(item.name, item.price, item.stock_quantity)
        self.item_repository.save(item)
        logger.info(f"상품 등록: {item!r}")
        return item.id

    @transactional
    def update_item(self, item_id: int, name: str, price: int, stock_quantity: int) -> Item:
        """
        상품 수정 (변경 감지)

        Raises:
            NotFoundError: 상품 없음
            InvalidArgumentError: 이름 공백, 음수 가격/재고
        """
        self._validate(name, price, stock_quantity)

        item = self.find_one(item_id)
        item.name = name
        item.price = price
        item.stock_quantity = stock_quantity
        return item

    def find_items(self, dtype: Optional[str] = None) -> List[Item]:
        """상품 목록 (dtype: B / A / M, 없으면 전체)"""
        if dtype is None:
            return self.item_repository.find_all()

        dtype = dtype.upper()
        if dtype not in ITEM_TYPES:
            raise InvalidArgumentError(f"알 수 없는 상품 구분입니다: {dtype}")
        return self.item_repository.find_by_type(dtype)

    def find_one(self, item_id: int) -> Item:
        """상품 단건 조회 (없으면 NotFoundError)"""
        item = self.item_repository.find_one(item_id) if item_id is not None else None
        if item is None:
            raise NotFoundError(f"상품을 찾을 수 없습니다: {item_id}")
        return item
