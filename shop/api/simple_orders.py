"""주문 요약 API (주문 + 회원 + 배송, 주문상품 제외)"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from shop.api.deps import get_order_query_service
from shop.api.schemas import SimpleOrderSchema
from shop.repositories import OrderSearch
from shop.services import FetchStrategy, OrderQueryService

router = APIRouter(tags=["simple-orders"])


def _simple_orders(query_service: OrderQueryService, status, member_name, strategy: FetchStrategy):
    dtos = query_service.list_simple_orders(OrderSearch.of(status, member_name), strategy)
    return [SimpleOrderSchema.model_validate(dto) for dto in dtos]


@router.get("/api/v2/simple-orders", response_model=List[SimpleOrderSchema])
def simple_orders_v2(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V2: 엔티티 → DTO, 지연 로딩"""
    return _simple_orders(query_service, status, member_name, FetchStrategy.LAZY)


@router.get("/api/v3/simple-orders", response_model=List[SimpleOrderSchema])
def simple_orders_v3(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V3: 회원/배송 페치 조인"""
    return _simple_orders(query_service, status, member_name, FetchStrategy.FETCH_JOIN)


@router.get("/api/v4/simple-orders", response_model=List[SimpleOrderSchema])
def simple_orders_v4(
    status: Optional[str] = None,
    member_name: Optional[str] = None,
    query_service: OrderQueryService = Depends(get_order_query_service),
):
    """V4: 필요한 컬럼만 DTO로 직접 조회"""
    return _simple_orders(query_service, status, member_name, FetchStrategy.DTO)
