"""
주문 조회 전용 리포지토리 (DTO 직접 조회)
=========================================
화면/API 응답에 맞춘 조회는 엔티티 리포지토리와 분리한다.
엔티티를 만들지 않고 필요한 컬럼만 select 해서 DTO로 바로 받는다.

- find_order_query_dtos: 주문 1번 + 주문마다 주문상품 1번 (1 + N)
- find_all_by_dto_optimization: 주문 1번 + 주문상품 IN 1번 (1 + 1)
- find_all_by_dto_flat: 전부 조인해서 1번 (주문상품 단위 행, 페이징 불가)
- find_simple_order_dtos: 주문 + 회원 + 배송만 1번
"""
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from shop.models import Address, Delivery, Item, Member, Order, OrderItem, OrderStatus
from shop.repositories.order_search import OrderSearch, Page, apply_order_search, apply_page

logger = logging.getLogger(__name__)


# ─── DTO ───

@dataclass
class OrderItemQueryDto:
    """주문상품 조회 결과"""
    order_id: int
    item_name: str
    order_price: int
    count: int

    @classmethod
    def from_entity(cls, order_item: OrderItem) -> "OrderItemQueryDto":
        return cls(
            order_id=order_item.order_id,
            item_name=order_item.item.name,
            order_price=order_item.order_price,
            count=order_item.count,
        )


@dataclass
class OrderQueryDto:
    """주문 조회 결과 (주문상품 포함)"""
    order_id: int
    name: str  # 회원 이름
    order_date: datetime
    order_status: OrderStatus
    address: Address  # 배송지
    order_items: List[OrderItemQueryDto] = field(default_factory=list)

    @classmethod
    def from_entity(cls, order: Order) -> "OrderQueryDto":
        """엔티티 → DTO (연관관계에 접근하므로 세션 안에서 호출)"""
        return cls(
            order_id=order.id,
            name=order.member.name,
            order_date=order.order_date,
            order_status=order.status,
            address=_copy_address(order.delivery.address),
            order_items=[OrderItemQueryDto.from_entity(oi) for oi in order.order_items],
        )

    @property
    def total_price(self) -> int:
        return sum(oi.order_price * oi.count for oi in self.order_items)


@dataclass
class SimpleOrderQueryDto:
    """주문 요약 조회 결과 (주문상품 제외)"""
    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: Address

    @classmethod
    def from_entity(cls, order: Order) -> "SimpleOrderQueryDto":
        return cls(
            order_id=order.id,
            name=order.member.name,  # LAZY 초기화
            order_date=order.order_date,
            order_status=order.status,
            address=_copy_address(order.delivery.address),  # LAZY 초기화
        )


@dataclass
class OrderFlatDto:
    """플랫 조회 한 행 (주문 필드가 주문상품 수만큼 반복, 주문상품이 없으면 item_* 는 None)"""
    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: Address
    item_name: Optional[str] = None
    order_price: Optional[int] = None
    count: Optional[int] = None


def _copy_address(address: Optional[Address]) -> Address:
    """엔티티의 composite 값을 분리된 값 객체로 복사"""
    if address is None:
        return Address()
    return Address(address.city, address.street, address.zipcode)


def group_flat_rows(flats: Iterable[OrderFlatDto]) -> List[OrderQueryDto]:
    """
    플랫 행 → 주문별 DTO (메모리에서 그룹핑)

    그룹 키는 주문 id. 그룹은 처음 나온 순서, 그룹 안의 주문상품은 행 순서를 그대로 유지.
    """
    grouped: "OrderedDict[int, OrderQueryDto]" = OrderedDict()
    for flat in flats:
        dto = grouped.get(flat.order_id)
        if dto is None:
            dto = OrderQueryDto(
                order_id=flat.order_id,
                name=flat.name,
                order_date=flat.order_date,
                order_status=flat.order_status,
                address=flat.address,
            )
            grouped[flat.order_id] = dto
        if flat.item_name is not None:
            dto.order_items.append(
                OrderItemQueryDto(flat.order_id, flat.item_name, flat.order_price, flat.count)
            )
    return list(grouped.values())


def group_items_by_order(items: Iterable[OrderItemQueryDto]) -> Dict[int, List[OrderItemQueryDto]]:
    """주문상품 DTO → {주문 id: [주문상품...]} (행 순서 유지)"""
    grouped: Dict[int, List[OrderItemQueryDto]] = {}
    for item in items:
        grouped.setdefault(item.order_id, []).append(item)
    return grouped


# ─── 리포지토리 ───

class OrderQueryRepository:
    """주문 DTO 직접 조회"""

    def __init__(self, db: Session):
        self.db = db

    def _order_root_query(self, search: Optional[OrderSearch]):
        """주문 + 회원 + 배송 컬럼만 select (xToOne 조인이라 행 수 = 주문 수)"""
        query = (
            self.db.query(
                Order.id,
                Member.name,
                Order.order_date,
                Order.status,
                Delivery.city,
                Delivery.street,
                Delivery.zipcode,
            )
            .select_from(Order)
            .join(Order.member)
            .join(Order.delivery)
        )
        return apply_order_search(query, search)

    def _find_roots(self, search: Optional[OrderSearch], page: Optional[Page]) -> List[OrderQueryDto]:
        query = apply_page(self._order_root_query(search).order_by(Order.id), page)
        return [
            OrderQueryDto(
                order_id=row[0],
                name=row[1],
                order_date=row[2],
                order_status=row[3],
                address=Address(row[4], row[5], row[6]),
            )
            for row in query.all()
        ]

    def _find_order_items(self, order_ids: Sequence[int]) -> List[OrderItemQueryDto]:
        """주문상품 + 상품명 (주문 id가 하나면 =, 여러 개면 IN)"""
        query = (
            self.db.query(OrderItem.order_id, Item.name, OrderItem.order_price, OrderItem.count)
            .select_from(OrderItem)
            .join(OrderItem.item)
        )
        if len(order_ids) == 1:
            query = query.filter(OrderItem.order_id == order_ids[0])
        else:
            query = query.filter(OrderItem.order_id.in_(list(order_ids)))

        rows = query.order_by(OrderItem.order_id, OrderItem.id).all()
        return [OrderItemQueryDto(row[0], row[1], row[2], row[3]) for row in rows]

    def find_order_query_dtos(
        self,
        search: Optional[OrderSearch] = None,
        page: Optional[Page] = None,
    ) -> List[OrderQueryDto]:
        """
        주문 1번 + 주문마다 주문상품 1번 (1 + N)

        코드가 단순하고 단건 조회에는 충분하다. 목록이면 find_all_by_dto_optimization.
        """
        result = self._find_roots(search, page)
        for dto in result:
            dto.order_items = self._find_order_items([dto.order_id])
        return result

    def find_all_by_dto_optimization(
        self,
        search: Optional[OrderSearch] = None,
        page: Optional[Page] = None,
    ) -> List[OrderQueryDto]:
        """
        주문 1번 + 주문상품 IN 1번 (1 + 1)

        조인하지 않고 각각 조회하므로 중복 전송 데이터가 없고 페이징도 된다.
        """
        result = self._find_roots(search, page)
        if not result:
            return result

        order_ids = [dto.order_id for dto in result]
        item_map = group_items_by_order(self._find_order_items(order_ids))
        for dto in result:
            dto.order_items = item_map.get(dto.order_id, [])
        return result

    def find_all_by_dto_flat(self, search: Optional[OrderSearch] = None) -> List[OrderFlatDto]:
        """
        전부 조인해서 한 번에 (쿼리 1번)

        주문상품 단위로 행이 나오므로 주문 필드가 중복 전송된다. 행 기준 limit은
        주문상품을 자르게 되므로 페이징 불가. 주문상품 없는 주문은 외부 조인으로 한 행.
        """
        query = (
            self.db.query(
                Order.id,
                Member.name,
                Order.order_date,
                Order.status,
                Delivery.city,
                Delivery.street,
                Delivery.zipcode,
                Item.name,
                OrderItem.order_price,
                OrderItem.count,
            )
            .select_from(Order)
            .join(Order.member)
            .join(Order.delivery)
            .outerjoin(Order.order_items)
            .outerjoin(OrderItem.item)
        )
        query = apply_order_search(query, search)
        rows = query.order_by(Order.id, OrderItem.id).all()
        return [
            OrderFlatDto(
                order_id=row[0],
                name=row[1],
                order_date=row[2],
                order_status=row[3],
                address=Address(row[4], row[5], row[6]),
                item_name=row[7],
                order_price=row[8],
                count=row[9],
            )
            for row in rows
        ]

    def find_simple_order_dtos(self, search: Optional[OrderSearch] = None) -> List[SimpleOrderQueryDto]:
        """주문 + 회원 + 배송에서 필요한 컬럼만 select (쿼리 1번)"""
        query = self._order_root_query(search).order_by(Order.id)
        return [
            SimpleOrderQueryDto(
                order_id=row[0],
                name=row[1],
                order_date=row[2],
                order_status=row[3],
                address=Address(row[4], row[5], row[6]),
            )
            for row in query.all()
        ]
