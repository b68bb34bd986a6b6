"""
주문 목록 조회 서비스 (조회 방식별)
===================================
같은 주문 목록을 여섯 가지 방식으로 만든다. 결과는 모두 같고 쿼리 수와 페이징 가능 여부만 다르다.

| 방식        | 쿼리 수                 | 페이징 |
|-------------|-------------------------|--------|
| LAZY        | 1 + 연관관계 × 주문 수   | O (최대 1000건) |
| FETCH_JOIN  | 1                       | X      |
| BATCH       | 1 + ⌈N / batch_size⌉    | O      |
| DTO         | 1 + N                   | O      |
| DTO_BATCH   | 1 + 1                   | O      |
| FLAT        | 1                       | X      |

권장 순서:
    1. 엔티티 조회 → DTO 변환. 페이징이 필요하면 BATCH, 아니면 FETCH_JOIN
    2. 그래도 느리면 DTO 직접 조회 (DTO_BATCH)
    3. 쿼리 1번이 꼭 필요하면 FLAT (중복 전송량이 늘어 DTO_BATCH보다 느릴 수 있음)

연관관계는 모두 이 서비스 안(세션 안)에서 초기화한다. 세션 밖으로 초기화되지 않은
지연 로딩 프록시가 나가지 않는다.
"""
import enum
import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from shop.config import settings
from shop.database import count_queries
from shop.exceptions import InvalidArgumentError
from shop.models import Order
from shop.repositories.order_query import (
    OrderQueryDto,
    OrderQueryRepository,
    SimpleOrderQueryDto,
    group_flat_rows,
)
from shop.repositories.order_repository import OrderRepository
from shop.repositories.order_search import OrderSearch, Page

logger = logging.getLogger(__name__)


class FetchStrategy(str, enum.Enum):
    """주문 목록 조회 방식"""
    LAZY = "lazy"              # 엔티티 조회 + 지연 로딩 (N+1)
    FETCH_JOIN = "fetch_join"  # 컬렉션까지 페치 조인
    BATCH = "batch"            # xToOne 페치 조인 + 주문상품 IN 배치 조회
    DTO = "dto"                # DTO 직접 조회, 주문상품 주문마다 조회
    DTO_BATCH = "dto_batch"    # DTO 직접 조회, 주문상품 IN 한 번
    FLAT = "flat"              # 전부 조인한 플랫 조회 + 메모리 그룹핑


# 행이 주문상품 단위로 늘어나는 방식 (행 기준 limit이 주문을 자름)
PAGING_UNSUPPORTED = frozenset({FetchStrategy.FETCH_JOIN, FetchStrategy.FLAT})

# 주문 요약(주문상품 제외) 조회에서 쓸 수 있는 방식
SIMPLE_ORDER_STRATEGIES = frozenset({FetchStrategy.LAZY, FetchStrategy.FETCH_JOIN, FetchStrategy.DTO})


def parse_fetch_strategy(value: Union[str, FetchStrategy, None]) -> FetchStrategy:
    """문자열 → FetchStrategy (None이면 DTO_BATCH)"""
    if value is None:
        return FetchStrategy.DTO_BATCH
    if isinstance(value, FetchStrategy):
        return value
    try:
        return FetchStrategy(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in FetchStrategy)
        raise InvalidArgumentError(f"알 수 없는 조회 방식입니다: '{value}' (허용: {allowed})")


def _chunked(values: Sequence[int], size: int):
    """size개씩 나누기"""
    for start in range(0, len(values), size):
        yield values[start:start + size]


class OrderQueryService:
    """주문 목록 조회 (읽기 전용)"""

    def __init__(
        self,
        db: Session,
        batch_fetch_size: Optional[int] = None,
        max_search_results: Optional[int] = None,
    ):
        self.db = db
        self.order_repository = OrderRepository(db)
        self.order_query_repository = OrderQueryRepository(db)
        if batch_fetch_size is None:
            batch_fetch_size = settings.batch_fetch_size
        if max_search_results is None:
            max_search_results = settings.max_search_results
        self.batch_fetch_size = batch_fetch_size
        self.max_search_results = max_search_results

        # 명시한 0도 기본값으로 바꾸지 않고 거부
        if self.batch_fetch_size <= 0:
            raise InvalidArgumentError(f"batch_fetch_size는 1 이상이어야 합니다: {self.batch_fetch_size}")
        if self.max_search_results <= 0:
            raise InvalidArgumentError(f"max_search_results는 1 이상이어야 합니다: {self.max_search_results}")

    # ─── 진입점 ───

    def list_orders(
        self,
        search: Optional[OrderSearch] = None,
        page: Optional[Page] = None,
        strategy: Union[str, FetchStrategy, None] = FetchStrategy.DTO_BATCH,
    ) -> List[OrderQueryDto]:
        """
        주문 목록 (주문상품 포함)

        Args:
            search: 검색 조건 (None이면 전체)
            page: 페이징 (None이면 전체)
            strategy: 조회 방식

        Raises:
            InvalidArgumentError: 알 수 없는 방식, 페이징을 지원하지 않는 방식에 페이징 요청
        """
        strategy = parse_fetch_strategy(strategy)
        if page is not None and strategy in PAGING_UNSUPPORTED:
            raise InvalidArgumentError(
                f"'{strategy.value}' 방식은 페이징을 지원하지 않습니다 "
                f"(1:N 조인 행에 offset/limit을 걸면 주문이 아니라 주문상품이 잘립니다). "
                f"batch 또는 dto_batch 방식을 사용하세요."
            )

        handlers: Dict[FetchStrategy, Callable[[], List[OrderQueryDto]]] = {
            FetchStrategy.LAZY: lambda: self.orders_lazy(search, page),
            FetchStrategy.FETCH_JOIN: lambda: self.orders_fetch_join(search),
            FetchStrategy.BATCH: lambda: self.orders_batch(search, page),
            FetchStrategy.DTO: lambda: self.order_query_repository.find_order_query_dtos(search, page),
            FetchStrategy.DTO_BATCH: lambda: self.order_query_repository.find_all_by_dto_optimization(search, page),
            FetchStrategy.FLAT: lambda: self.orders_flat(search),
        }

        with count_queries(self.db, f"orders:{strategy.value}"):
            return handlers[strategy]()

    # ─── 엔티티 조회 → DTO 변환 ───

    def orders_lazy(self, search: Optional[OrderSearch] = None, page: Optional[Page] = None) -> List[OrderQueryDto]:
        """
        엔티티 조회 후 DTO 변환 (페치 조인 X)

        DTO를 만들면서 회원, 배송, 주문상품, 상품에 처음 접근할 때마다 지연 로딩 쿼리가 나간다.
        """
        orders = self.order_repository.find_all_by_search(search, page, self.max_search_results)
        return [OrderQueryDto.from_entity(order) for order in orders]

    def orders_fetch_join(self, search: Optional[OrderSearch] = None) -> List[OrderQueryDto]:
        """엔티티 조회 후 DTO 변환 (컬렉션까지 페치 조인, 쿼리 1번, 페이징 불가)"""
        orders = self.order_repository.find_all_with_item(search)
        return [OrderQueryDto.from_entity(order) for order in orders]

    def orders_batch(self, search: Optional[OrderSearch] = None, page: Optional[Page] = None) -> List[OrderQueryDto]:
        """
        xToOne 페치 조인 + 컬렉션 배치 조회 (페이징 가능)

        회원/배송은 조인으로 가져오고, 주문상품은 현재 페이지의 주문 id를 batch_fetch_size개씩
        IN 절로 묶어 조회한 뒤 주문별로 나눠 채운다.
        """
        orders = self.order_repository.find_all_with_member_delivery(search, page)
        self._batch_load_order_items(orders)
        return [OrderQueryDto.from_entity(order) for order in orders]

    def _batch_load_order_items(self, orders: Sequence[Order]):
        """주문상품 컬렉션을 IN 쿼리로 초기화 (지연 로딩 쿼리가 추가로 나가지 않음)"""
        order_ids = [order.id for order in orders]
        grouped: Dict[int, list] = {order_id: [] for order_id in order_ids}

        for chunk in _chunked(order_ids, self.batch_fetch_size):
            for order_item in self.order_repository.find_order_items_in(chunk):
                grouped[order_item.order_id].append(order_item)

        for order in orders:
            set_committed_value(order, "order_items", grouped[order.id])

    # ─── DTO 직접 조회 ───

    def orders_flat(self, search: Optional[OrderSearch] = None) -> List[OrderQueryDto]:
        """플랫 조회 1번 + 주문 id로 메모리 그룹핑"""
        flats = self.order_query_repository.find_all_by_dto_flat(search)
        result = group_flat_rows(flats)
        logger.debug(f"플랫 조회: {len(flats)}행 → 주문 {len(result)}건")
        return result

    # ─── 주문 요약 (주문상품 제외) ───

    def list_simple_orders(
        self,
        search: Optional[OrderSearch] = None,
        strategy: Union[str, FetchStrategy, None] = FetchStrategy.DTO,
    ) -> List[SimpleOrderQueryDto]:
        """
        주문 + 회원 + 배송 요약

        - LAZY: 주문 1번 + 회원 N + 배송 N (같은 회원은 영속성 컨텍스트에서 재사용)
        - FETCH_JOIN: 1번, 엔티티 전체 컬럼 select (리포지토리 재사용성 좋음)
        - DTO: 1번, 필요한 컬럼만 select (화면 전용, 엔티티가 아니라 수정 불가)
        """
        strategy = parse_fetch_strategy(strategy)
        if strategy not in SIMPLE_ORDER_STRATEGIES:
            allowed = ", ".join(sorted(s.value for s in SIMPLE_ORDER_STRATEGIES))
            raise InvalidArgumentError(f"주문 요약 조회에서 지원하지 않는 방식입니다: '{strategy.value}' (허용: {allowed})")

        with count_queries(self.db, f"simple-orders:{strategy.value}"):
            if strategy == FetchStrategy.DTO:
                return self.order_query_repository.find_simple_order_dtos(search)

            if strategy == FetchStrategy.FETCH_JOIN:
                orders = self.order_repository.find_all_with_member_delivery(search)
            else:
                orders = self.order_repository.find_all_by_search(search, max_results=self.max_search_results)
            return [SimpleOrderQueryDto.from_entity(order) for order in orders]

    # ─── 엔티티 그대로 ───

    def list_order_entities(self, search: Optional[OrderSearch] = None) -> List[Order]:
        """
        주문 엔티티 목록 (연관관계 강제 초기화)

        응답 변환은 호출 쪽에서 하지만, 세션이 닫힌 뒤 지연 로딩이 일어나지 않도록
        여기서 회원/배송/주문상품/상품을 모두 초기화해 둔다.
        """
        with count_queries(self.db, "orders:entities"):
            orders = self.order_repository.find_all_by_search(search, max_results=self.max_search_results)
            for order in orders:
                order.member.name
                order.delivery.address
                for order_item in order.order_items:
                    order_item.item.name
        return orders
