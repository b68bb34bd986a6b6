"""상품 리포지토리"""
from typing import List

from shop.models import Item
from shop.repositories.base import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """상품 조회 (Book / Album / Movie 모두 Item으로 조회하면 하위 타입으로 반환)"""

    model = Item

    def find_by_type(self, dtype: str) -> List[Item]:
        """구분값(B/A/M)으로 조회"""
        return (
            self.db.query(Item)
            .filter(Item.dtype == dtype)
            .order_by(Item.id)
            .all()
        )
