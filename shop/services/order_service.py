"""주문 서비스 (주문 / 취소 / 검색)"""
import dataclasses
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from shop.exceptions import InvalidArgumentError, NotFoundError
from shop.models import Address, Delivery, DeliveryStatus, Order, OrderItem
from shop.repositories.item_repository import ItemRepository
from shop.repositories.member_repository import MemberRepository
from shop.repositories.order_repository import OrderRepository
from shop.repositories.order_search import OrderSearch
from shop.services.transaction_manager import transactional
from shop.utils.validators import OrderValidator, raise_if_invalid

logger = logging.getLogger(__name__)


class OrderService:
    """
    주문 생성과 취소는 각각 하나의 작업 단위

    재고 차감/복원과 주문·주문상품 변경이 같이 커밋되거나 같이 롤백된다.
    """

    def __init__(self, db: Session):
        self.db = db
        self.member_repository = MemberRepository(db)
        self.item_repository = ItemRepository(db)
        self.order_repository = OrderRepository(db)
        self.validator = OrderValidator()

    @transactional
    def order(self, member_id: int, item_id: int, count: int) -> int:
        """
        주문 (상품 하나)

        수량 0이면 주문상품 없는 빈 주문이 생성된다 (총액 0, 재고 변화 없음).

        Returns:
            주문 id

        Raises:
            InvalidArgumentError: 음수 수량
            NotFoundError: 회원 / 상품 없음
            NotEnoughStockError: 재고 부족
        """
        return self._place_order(member_id, [(item_id, count)])

    @transactional
    def order_lines(self, member_id: int, lines: Iterable[Tuple[int, int]]) -> int:
        """주문 (여러 상품, (상품 id, 수량) 목록). 하나라도 재고가 부족하면 전체 롤백."""
        return self._place_order(member_id, list(lines))

    def _place_order(self, member_id: int, lines: List[Tuple[int, int]]) -> int:
        if not lines:
            raise InvalidArgumentError("주문할 상품이 없습니다")

        for _, count in lines:
            err = self.validator.validate_count(count)
            if err:
                raise_if_invalid([err])

        # 엔티티 조회
        member = self.member_repository.find_one(member_id) if member_id is not None else None
        if member is None:
            raise NotFoundError(f"회원을 찾을 수 없습니다: {member_id}")

        items = []
        for item_id, count in lines:
            item = self.item_repository.find_one(item_id) if item_id is not None else None
            if item is None:
                raise NotFoundError(f"상품을 찾을 수 없습니다: {item_id}")
            items.append((item, count))

        # 배송정보 생성 (회원 주소로)
        delivery = Delivery(
            address=dataclasses.replace(member.address) if member.address else Address(),
            status=DeliveryStatus.READY,
        )

        # 주문상품 생성 (재고 차감, 수량 0은 라인 없음)
        order_items = [
            OrderItem.create_order_item(item, item.price, count)
            for item, count in items
            if count > 0
        ]

        # 주문 생성
        order = Order.create_order(member, delivery, order_items)
        self.order_repository.save(order)

        logger.info(
            f"주문 생성: order={order.id}, member={member.id}, "
            f"lines={len(order_items)}, total={order.total_price}"
        )
        return order.id

    @transactional
    def cancel_order(self, order_id: int) -> Order:
        """
        주문 취소

        이미 취소된 주문이면 성공으로 보고 아무것도 바꾸지 않는다.

        Raises:
            NotFoundError: 주문 없음
        """
        order = self.find_order(order_id)

        if order.cancel():
            logger.info(f"주문 취소: order={order.id}, 재고 복원 {len(order.order_items)}건")
        else:
            logger.info(f"이미 취소된 주문: order={order.id}")
        return order

    def find_order(self, order_id: int) -> Order:
        """주문 단건 조회 (없으면 NotFoundError)"""
        order = self.order_repository.find_one(order_id) if order_id is not None else None
        if order is None:
            raise NotFoundError(f"주문을 찾을 수 없습니다: {order_id}")
        return order

    def find_orders(self, search: Optional[OrderSearch] = None) -> List[Order]:
        """주문 검색 (엔티티, 최대 1000건)"""
        return self.order_repository.find_all_by_search(search)

    def find_orders_by_member(self, member_id: int) -> List[Order]:
        """회원의 주문 목록"""
        if self.member_repository.find_one(member_id) is None:
            raise NotFoundError(f"회원을 찾을 수 없습니다: {member_id}")
        return self.order_repository.find_by_member(member_id)
