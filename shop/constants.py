"""비즈니스 상수 - 매직넘버 중앙 관리"""

# 주문 검색
MAX_SEARCH_RESULTS = 1000  # 엔티티 검색 최대 1000건
DEFAULT_PAGE_OFFSET = 0
DEFAULT_PAGE_LIMIT = 100

# 컬렉션 배치 조회 (IN 절 크기)
DEFAULT_BATCH_FETCH_SIZE = 100

# 상품 구분값 (single table 전략의 dtype 컬럼)
ITEM_TYPE_BOOK = "B"
ITEM_TYPE_ALBUM = "A"
ITEM_TYPE_MOVIE = "M"

# 입력 검증
MAX_NAME_LENGTH = 255
MAX_PRICE = 100_000_000
