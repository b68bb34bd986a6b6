"""API 요청/응답 스키마

엔티티를 그대로 받거나 내보내지 않는다. API 요청·응답 형태는 여기 스키마로 고정하고
엔티티가 바뀌어도 API가 바뀌지 않게 한다.
"""
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from shop.models import DeliveryStatus, OrderStatus

T = TypeVar("T")


class AddressSchema(BaseModel):
    """주소"""
    model_config = ConfigDict(from_attributes=True)

    city: Optional[str] = None
    street: Optional[str] = None
    zipcode: Optional[str] = None


class Result(BaseModel, Generic[T]):
    """목록 응답 래퍼 (배열을 바로 반환하지 않아 count 등 필드 추가가 쉬움)"""
    count: int
    data: T


# ─── 회원 ───

class MemberV1Request(BaseModel):
    """회원 등록 V1: 엔티티 모양 그대로 받는 요청"""
    name: Optional[str] = None
    address: Optional[AddressSchema] = None


class CreateMemberRequest(BaseModel):
    """회원 등록 V2"""
    name: str = Field(..., min_length=1)
    address: Optional[AddressSchema] = None


class CreateMemberResponse(BaseModel):
    id: int


class UpdateMemberRequest(BaseModel):
    name: str


class UpdateMemberResponse(BaseModel):
    id: int
    name: str


class MemberDto(BaseModel):
    """회원 조회 V2 항목"""
    name: str


class MemberResponse(BaseModel):
    """회원 조회 V1 (엔티티 필드 전부)"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: Optional[AddressSchema] = None


# ─── 상품 ───

class ItemBaseRequest(BaseModel):
    name: str
    price: int = Field(..., ge=0)
    stock_quantity: int = Field(..., ge=0)


class BookRequest(ItemBaseRequest):
    author: Optional[str] = None
    isbn: Optional[str] = None


class AlbumRequest(ItemBaseRequest):
    artist: Optional[str] = None
    etc: Optional[str] = None


class MovieRequest(ItemBaseRequest):
    director: Optional[str] = None
    actor: Optional[str] = None


class UpdateItemRequest(ItemBaseRequest):
    pass


class ItemResponse(BaseModel):
    """상품 (하위 타입 전용 필드는 해당 타입일 때만 채워짐)"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    dtype: str
    name: str
    price: int
    stock_quantity: int
    author: Optional[str] = None
    isbn: Optional[str] = None
    artist: Optional[str] = None
    etc: Optional[str] = None
    director: Optional[str] = None
    actor: Optional[str] = None


# ─── 주문 ───

class CreateOrderRequest(BaseModel):
    member_id: int
    item_id: int
    count: int


class OrderLineRequest(BaseModel):
    item_id: int
    count: int


class CreateMultiOrderRequest(BaseModel):
    member_id: int
    lines: List[OrderLineRequest]


class OrderIdResponse(BaseModel):
    order_id: int


class OrderStatusResponse(BaseModel):
    order_id: int
    status: OrderStatus
    total_price: int


class OrderItemQuerySchema(BaseModel):
    """주문상품 DTO"""
    model_config = ConfigDict(from_attributes=True)

    order_id: int
    item_name: str
    order_price: int
    count: int


class OrderQuerySchema(BaseModel):
    """주문 DTO (주문상품 포함)"""
    model_config = ConfigDict(from_attributes=True)

    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: AddressSchema
    order_items: List[OrderItemQuerySchema]


class SimpleOrderSchema(BaseModel):
    """주문 요약 DTO"""
    model_config = ConfigDict(from_attributes=True)

    order_id: int
    name: str
    order_date: datetime
    order_status: OrderStatus
    address: AddressSchema


class DeliveryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    address: Optional[AddressSchema] = None
    status: DeliveryStatus


class OrderItemEntityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item: ItemResponse
    order_price: int
    count: int
    total_price: int


class OrderEntityResponse(BaseModel):
    """주문 V1: 엔티티 그래프를 그대로 옮긴 응답 (양방향 참조는 없음)"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    member: MemberResponse
    delivery: DeliveryResponse
    order_items: List[OrderItemEntityResponse]
    order_date: datetime
    status: OrderStatus
    total_price: int
