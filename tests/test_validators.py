"""
validators.py 테스트
====================
MemberValidator, ItemValidator, OrderValidator 테스트
"""
import pytest

from shop.constants import MAX_NAME_LENGTH, MAX_PRICE
from shop.exceptions import InvalidArgumentError
from shop.utils.validators import (
    ItemValidator,
    MemberValidator,
    OrderValidator,
    ValidationError,
    raise_if_invalid,
    validate_name,
    validate_non_negative_int,
)


class TestValidateName:
    """이름 검증"""

    def test_valid_name(self):
        """유효한 이름"""
        assert validate_name("김영한") is None
        assert validate_name("!@#$") is None  # 특수문자만
        assert validate_name("12345") is None  # 숫자만

    def test_none(self):
        """이름 없음"""
        error = validate_name(None)
        assert error is not None
        assert "없습니다" in error.message

    def test_blank(self):
        """빈 문자열 / 공백"""
        assert "비어" in validate_name("").message
        assert "비어" in validate_name("   ").message

    def test_not_string(self):
        error = validate_name(123)
        assert error is not None
        assert error.value == 123

    def test_too_long(self):
        """최대 길이 초과"""
        error = validate_name("가" * (MAX_NAME_LENGTH + 1))
        assert error is not None
        assert "너무 깁니다" in error.message

    def test_field_name(self):
        assert validate_name("", "item_name").field == "item_name"


class TestValidateNonNegativeInt:
    """0 이상 정수 검증"""

    def test_valid(self):
        assert validate_non_negative_int(0, "count") is None
        assert validate_non_negative_int(100, "count") is None

    def test_negative(self):
        error = validate_non_negative_int(-1, "count")
        assert error is not None
        assert "음수" in error.message

    def test_not_int(self):
        """문자열, 실수, bool 거부"""
        assert validate_non_negative_int("10", "count") is not None
        assert validate_non_negative_int(1.5, "count") is not None
        assert validate_non_negative_int(True, "count") is not None

    def test_maximum(self):
        assert validate_non_negative_int(11, "price", maximum=10) is not None
        assert validate_non_negative_int(10, "price", maximum=10) is None


class TestMemberValidator:
    """MemberValidator 테스트"""

    def setup_method(self):
        self.validator = MemberValidator()

    def test_valid(self):
        assert self.validator.validate({"name": "kim"}) == []

    def test_missing_name(self):
        errors = self.validator.validate({})
        assert len(errors) == 1
        assert errors[0].field == "name"


class TestItemValidator:
    """ItemValidator 테스트"""

    def setup_method(self):
        self.validator = ItemValidator()

    def test_valid(self):
        """유효한 상품"""
        errors = self.validator.validate({"name": "JPA", "price": 10000, "stock_quantity": 10})
        assert errors == []

    def test_multiple_errors(self):
        """여러 필드 오류를 모두 반환"""
        errors = self.validator.validate({"name": "", "price": -1, "stock_quantity": -1})
        assert [e.field for e in errors] == ["name", "price", "stock_quantity"]

    def test_price_too_high(self):
        errors = self.validator.validate({"name": "JPA", "price": MAX_PRICE + 1, "stock_quantity": 0})
        assert [e.field for e in errors] == ["price"]


class TestOrderValidator:
    """OrderValidator 테스트"""

    def setup_method(self):
        self.validator = OrderValidator()

    def test_zero_allowed(self):
        """수량 0 허용"""
        assert self.validator.validate_count(0) is None

    def test_negative(self):
        assert self.validator.validate_count(-3) is not None


class TestRaiseIfInvalid:
    """raise_if_invalid 테스트"""

    def test_no_errors(self):
        raise_if_invalid([])

    def test_first_error(self):
        """첫 번째 오류 메시지로 예외"""
        errors = [ValidationError("price", "음수일 수 없습니다"), ValidationError("name", "이름이 없습니다")]
        with pytest.raises(InvalidArgumentError) as exc_info:
            raise_if_invalid(errors)
        assert "price" in exc_info.value.message
        assert exc_info.value.status_code == 400
