"""애플리케이션 예외

서비스 계층에서 발생시키고 API 계층(exception handler)에서 HTTP 응답으로 변환한다.
예외가 발생하면 작업 단위 전체가 롤백되어 부분 반영이 남지 않는다.
"""


class ShopError(Exception):
    """애플리케이션 오류 베이스"""

    code = "SHOP_ERROR"
    status_code = 500

    def __init__(self, message: str, code: str = None, status_code: int = None):
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(f"[{self.code}] {message}")


class NotFoundError(ShopError):
    """존재하지 않는 회원 / 상품 / 주문"""
    code = "NOT_FOUND"
    status_code = 404


class NotEnoughStockError(ShopError):
    """주문 수량이 재고보다 많음"""
    code = "NOT_ENOUGH_STOCK"
    status_code = 409


class InvalidArgumentError(ShopError):
    """잘못된 입력 (음수 수량, 알 수 없는 상태값, 지원하지 않는 페이징 조합 등)"""
    code = "INVALID_ARGUMENT"
    status_code = 400


class ConflictError(ShopError):
    """중복 회원 또는 동시 수정 충돌"""
    code = "CONFLICT"
    status_code = 409
