"""
주문 리포지토리 (엔티티 조회)
=============================
같은 "주문 목록"을 연관관계를 가져오는 방식만 바꿔 여러 형태로 조회한다.

- find_all_by_search: 주문만 조회, 연관관계는 접근할 때 지연 로딩 (N+1)
- find_all_with_member_delivery: xToOne(회원, 배송) 페치 조인 → 페이징 가능
- find_all_with_item: 컬렉션(주문상품)까지 페치 조인 → 페이징 불가
- find_order_items_in: 주문 id 묶음의 주문상품을 IN 쿼리 한 번으로 조회 (배치 로딩)
"""
import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import contains_eager

from shop.constants import MAX_SEARCH_RESULTS
from shop.models import Order, OrderItem
from shop.repositories.base import BaseRepository
from shop.repositories.order_search import OrderSearch, Page, apply_order_search, apply_page

logger = logging.getLogger(__name__)


def distinct_by_identity(orders: Sequence[Order]) -> List[Order]:
    """
    조인으로 중복된 주문 행 제거 (엔티티 동일성 기준, 처음 나온 순서 유지)

    Order와 OrderItem을 조인하면 Order가 주문상품 수만큼 반복된다.
    """
    unique: Dict[int, Order] = {}
    for order in orders:
        unique.setdefault(order.id, order)
    return list(unique.values())


class OrderRepository(BaseRepository[Order]):
    """주문 조회"""

    model = Order

    def find_all_by_search(
        self,
        search: Optional[OrderSearch] = None,
        page: Optional[Page] = None,
        max_results: int = MAX_SEARCH_RESULTS,
    ) -> List[Order]:
        """
        검색 조건으로 주문 엔티티만 조회 (최대 max_results건)

        회원은 where 절 때문에 조인하지만 select 하지는 않는다.
        member, delivery, order_items는 처음 접근할 때 각각 쿼리가 나간다.
        """
        query = self.db.query(Order).join(Order.member)
        query = apply_order_search(query, search)
        query = apply_page(query.order_by(Order.id), page, max_results)
        return query.all()

    def find_by_member(self, member_id: int) -> List[Order]:
        """회원의 주문 목록 (Member에 orders 필드를 두지 않는 대신 사용)"""
        return (
            self.db.query(Order)
            .filter(Order.member_id == member_id)
            .order_by(Order.id)
            .all()
        )

    def find_all_with_member_delivery(
        self,
        search: Optional[OrderSearch] = None,
        page: Optional[Page] = None,
    ) -> List[Order]:
        """
        주문 + 회원 + 배송 페치 조인

        xToOne 관계는 조인해도 행 수가 늘지 않으므로 offset / limit이 주문 단위로 정확하다.
        """
        query = (
            self.db.query(Order)
            .join(Order.member)
            .join(Order.delivery)
            .options(contains_eager(Order.member), contains_eager(Order.delivery))
        )
        query = apply_order_search(query, search)
        query = apply_page(query.order_by(Order.id), page)
        return query.all()

    def find_all_with_item(self, search: Optional[OrderSearch] = None) -> List[Order]:
        """
        주문 + 회원 + 배송 + 주문상품 + 상품 페치 조인 (쿼리 1번)

        1:N 조인이라 주문 행이 주문상품 수만큼 늘어난다. 여기에 offset / limit을 걸면
        주문이 아니라 주문상품이 잘리므로 페이징 파라미터를 받지 않는다.
        주문상품이 없는 주문도 남도록 컬렉션은 외부 조인.
        """
        query = (
            self.db.query(Order)
            .join(Order.member)
            .join(Order.delivery)
            .outerjoin(Order.order_items)
            .outerjoin(OrderItem.item)
            .options(
                contains_eager(Order.member),
                contains_eager(Order.delivery),
                contains_eager(Order.order_items).contains_eager(OrderItem.item),
            )
        )
        query = apply_order_search(query, search)
        rows = query.order_by(Order.id, OrderItem.id).all()
        orders = distinct_by_identity(rows)
        logger.debug(f"컬렉션 페치 조인: {len(rows)}행 → 주문 {len(orders)}건")
        return orders

    def find_order_items_in(self, order_ids: Sequence[int]) -> List[OrderItem]:
        """
        주문 id 목록의 주문상품 + 상품 (IN 쿼리 1번)

        주문 id, 주문상품 id 순으로 정렬해서 주문별 라인 순서를 고정한다.
        """
        if not order_ids:
            return []

        return (
            self.db.query(OrderItem)
            .join(OrderItem.item)
            .options(contains_eager(OrderItem.item))
            .filter(OrderItem.order_id.in_(list(order_ids)))
            .order_by(OrderItem.order_id, OrderItem.id)
            .all()
        )
