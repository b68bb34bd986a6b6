"""
주문 API

사용법:
    POST /api/orders                      {"member_id": 1, "item_id": 2, "count": 3}
    POST /api/orders/multi                {"member_id": 1, "lines": [{"item_id": 2, "count": 1}]}
    POST /api/orders/{id}/cancel
    GET  /api/v2/orders?status=ORDER&member_name=kim
    GET  /api/v3.1/orders?offset=0&limit=100
    GET  /api/orders?strategy=batch&offset=0&limit=10

v1 ~ v6은 같은 주문 목록을 조회 방식만 바꿔서 반환한다 (v1만 엔티티 모양).
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from shop.api.deps import get_order_query_service, get_order_service
from shop.api.schemas import (
    CreateMultiOrderRequest,
    CreateOrderRequest,
    OrderEntityResponse,
    OrderIdResponse,
    OrderQuerySchema,
    OrderStatusResponse,
)
from shop.config import settings
from shop.constants import DEFAULT_PAGE_OFFSET
from shop.repositories import OrderSearch, Page
from shop.services import FetchStrategy, OrderQueryService, OrderService

router = APIRouter(tags=["orders"])


def _to_schemas(dtos) -> List[OrderQuerySchema]:
    return [OrderQuerySchema.model_validate(dto) for dto in dtos]


def _status_response(order) -> OrderStatusResponse:
    return OrderStatusResponse(order_id=order.id, status=order.status, total_price=order.total_price)


# ─── 주문 / 취소 ───

@router.post("/api/orders", response_model=OrderIdResponse)
def create_order(body: CreateOrderRequest, order_service: OrderService = Depends(get_order_service)):
    """주문 (상품 하나)"""
    order_id = order_service.order(body.member_id, body.item_id, body.count)
    return OrderIdResponse(order_id=order_id)


@router.post("/api/orders/multi", response_model=OrderIdResponse)
def create_multi_order(body: CreateMultiOrderRequest, order_service: OrderService = Depends(get_order_service)):
    """주문 (여러 상품)"""
    lines = [(line.item_id, line.count) for line in body.lines]
    order_id = order_service.order_lines(body.member_id, lines)
    return OrderIdResponse(order_id=order_id)


@router.post("/api/orders/{order_id}/cancel", response_model=OrderStatusResponse)
def cancel_order(order_id: int, order_service: OrderService = Depends(get_order_service)):
    """주문 취소 (이미 취소된 주문도 200)"""
    return _status_response(order_service.cancel_order(order_id))


@router.get("/api/orders/{order_id}", response_model=OrderStatusResponse)
def get_order(order_id: int, order_service: OrderService = Depends(get_order_service)):
    return _status_response(order_service.find_order(order_id))


@router.get("/api/members/{member_id}/orders", response_model=List[OrderStatusResponse])
def member_orders(member_id: int, order_service: OrderService = Depends(get_order_service)):
    """회원의 주문 목록 (회원 → 주문 연관관계 없이 리포지토리 조회)"""
    return [_status_response(order) for order in order_service.find_orders_by_member(member_id)]


# ─── 주문 목록 (조회 방식별) ───

@router.get("/api/v1/orders", response_model=List[OrderEntityResponse])
def orders_v1(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V1: 엔티티 그래프 그대로 (연관관계는 서비스에서 초기화)"""
    orders = query_service.list_order_entities(OrderSearch.of(status, member_name))
    return [OrderEntityResponse.model_validate(order) for order in orders]


@router.get("/api/v2/orders", response_model=List[OrderQuerySchema])
def orders_v2(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V2: 엔티티 → DTO, 지연 로딩 (N+1)"""
    dtos = query_service.list_orders(OrderSearch.of(status, member_name), Page.of(offset, limit), FetchStrategy.LAZY)
    return _to_schemas(dtos)


@router.get("/api/v3/orders", response_model=List[OrderQuerySchema])
def orders_v3(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V3: 컬렉션 페치 조인 (offset/limit을 주면 400)"""
    dtos = query_service.list_orders(
        OrderSearch.of(status, member_name), Page.of(offset, limit), FetchStrategy.FETCH_JOIN
    )
    return _to_schemas(dtos)


@router.get("/api/v3.1/orders", response_model=List[OrderQuerySchema])
def orders_v3_page(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: int = DEFAULT_PAGE_OFFSET,
    limit: int = settings.default_page_limit,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V3.1: xToOne 페치 조인 + 주문상품 배치 조회 (페이징)"""
    dtos = query_service.list_orders(OrderSearch.of(status, member_name), Page.of(offset, limit), FetchStrategy.BATCH)
    return _to_schemas(dtos)


@router.get("/api/v4/orders", response_model=List[OrderQuerySchema])
def orders_v4(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V4: DTO 직접 조회 (1 + N)"""
    dtos = query_service.list_orders(OrderSearch.of(status, member_name), Page.of(offset, limit), FetchStrategy.DTO)
    return _to_schemas(dtos)


@router.get("/api/v5/orders", response_model=List[OrderQuerySchema])
def orders_v5(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V5: DTO 직접 조회, 주문상품 IN 한 번 (1 + 1)"""
    dtos = query_service.list_orders(
        OrderSearch.of(status, member_name), Page.of(offset, limit), FetchStrategy.DTO_BATCH
    )
    return _to_schemas(dtos)


@router.get("/api/v6/orders", response_model=List[OrderQuerySchema])
def orders_v6(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V6: 플랫 조회 1번 + 메모리 그룹핑 (offset/limit을 주면 400)"""
    dtos = query_service.list_orders(OrderSearch.of(status, member_name), Page.of(offset, limit), FetchStrategy.FLAT)
    return _to_schemas(dtos)


@router.get("/api/orders", response_model=List[OrderQuerySchema])
def orders_by_strategy(
    strategy: Optional[str] = None,
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """조회 방식을 파라미터로 고르는 주문 목록 (기본 dto_batch)"""
    dtos = query_service.list_orders(OrderSearch.of(status, member_name), Page.of(offset, limit), strategy)
    return _to_schemas(dtos)
