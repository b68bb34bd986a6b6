"""
주문 검색 조건 / 페이징
=======================
모든 주문 조회 방식이 같은 조건을 쓰도록 검색 조건과 동적 where 절을 한 곳에 둔다.

사용법:
    search = OrderSearch.of(status="order", member_name="kim")
    page = Page.of(offset=0, limit=10)
    query = apply_order_search(db.query(Order).join(Order.member), search)
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Query

from shop.constants import DEFAULT_PAGE_LIMIT, DEFAULT_PAGE_OFFSET
from shop.exceptions import InvalidArgumentError
from shop.models import Member, Order, OrderStatus


def parse_order_status(token: Optional[str]) -> Optional[OrderStatus]:
    """
    상태 문자열 → OrderStatus

    None / 빈 문자열이면 상태 조건 없음. 모르는 값은 쿼리를 만들기 전에 거부한다.

    Raises:
        InvalidArgumentError: ORDER / CANCEL 이외의 값
    """
    if token is None:
        return None
    if isinstance(token, OrderStatus):
        return token

    token = str(token).strip()
    if not token:
        return None

    try:
        return OrderStatus(token.upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidArgumentError(f"알 수 없는 주문 상태입니다: '{token}' (허용: {allowed})")


@dataclass(frozen=True)
class OrderSearch:
    """주문 검색 조건 (주문 상태, 회원 이름 부분 일치)"""
    order_status: Optional[OrderStatus] = None
    member_name: Optional[str] = None

    @classmethod
    def of(cls, status: Optional[str] = None, member_name: Optional[str] = None) -> "OrderSearch":
        """요청 파라미터로 검색 조건 생성 (상태값 검증 포함)"""
        name = member_name.strip() if member_name else None
        return cls(order_status=parse_order_status(status), member_name=name or None)


@dataclass(frozen=True)
class Page:
    """offset / limit 페이징"""
    offset: int = DEFAULT_PAGE_OFFSET
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def of(cls, offset: Optional[int] = None, limit: Optional[int] = None) -> Optional["Page"]:
        """
        페이징 파라미터 검증

        둘 다 None이면 페이징 없음(None). 하나만 오면 나머지는 기본값.

        Raises:
            InvalidArgumentError: 음수 offset, 0 이하 limit
        """
        if offset is None and limit is None:
            return None

        offset = DEFAULT_PAGE_OFFSET if offset is None else offset
        limit = DEFAULT_PAGE_LIMIT if limit is None else limit

        if offset < 0:
            raise InvalidArgumentError(f"offset은 0 이상이어야 합니다: {offset}")
        if limit <= 0:
            raise InvalidArgumentError(f"limit은 1 이상이어야 합니다: {limit}")
        return cls(offset=offset, limit=limit)


def apply_order_search(query: Query, search: Optional[OrderSearch]) -> Query:
    """
    검색 조건을 where 절로 추가 (Member가 이미 조인된 쿼리여야 함)

    - 주문 상태: o.status = :status
    - 회원 이름: m.name like %:name%
    """
    if search is None:
        return query

    if search.order_status is not None:
        query = query.filter(Order.status == search.order_status)

    if search.member_name:
        query = query.filter(Member.name.contains(search.member_name, autoescape=True))

    return query


def apply_page(query: Query, page: Optional[Page], max_results: Optional[int] = None) -> Query:
    """offset / limit 적용 (max_results가 있으면 limit 상한)"""
    limit = page.limit if page else None
    if max_results is not None:
        limit = max_results if limit is None else min(limit, max_results)

    if page and page.offset:
        query = query.offset(page.offset)
    if limit is not None:
        query = query.limit(limit)
    return query
