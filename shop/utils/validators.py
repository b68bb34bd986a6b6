"""
입력 검증 모듈
==============
회원 이름, 상품 가격/재고, 주문 수량 검증

사용법:
    validator = ItemValidator()
    errors = validator.validate({"name": "JPA", "price": 10000, "stock_quantity": 10})
    raise_if_invalid(errors)   # 하나라도 있으면 InvalidArgumentError
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from shop.constants import MAX_NAME_LENGTH, MAX_PRICE
from shop.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass
class ValidationError:
    """검증 오류"""
    field: str
    message: str
    value: Any = None


def validate_name(name: Any, field_name: str = "name") -> Optional[ValidationError]:
    """
    이름 검증 (회원명 / 상품명 공통)

    None, 빈 문자열, 공백만 있는 문자열은 거부. 특수문자·숫자만 있는 이름은 허용.
    """
    if name is None:
        return ValidationError(field_name, "이름이 없습니다")

    if not isinstance(name, str):
        return ValidationError(field_name, "이름은 문자열이어야 합니다", name)

    if not name.strip():
        return ValidationError(field_name, "이름이 비어 있습니다", name)

    if len(name) > MAX_NAME_LENGTH:
        return ValidationError(
            field_name,
            f"이름이 너무 깁니다 (최대 {MAX_NAME_LENGTH}자)",
            name[:50] + "...",
        )

    return None


def validate_non_negative_int(value: Any, field_name: str, maximum: int = None) -> Optional[ValidationError]:
    """0 이상 정수 검증 (가격, 재고, 주문 수량)"""
    if value is None:
        return ValidationError(field_name, "값이 없습니다")

    # bool은 int의 하위 타입이라 따로 거부
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationError(field_name, f"정수가 아닙니다: {value}", value)

    if value < 0:
        return ValidationError(field_name, f"음수일 수 없습니다: {value}", value)

    if maximum is not None and value > maximum:
        return ValidationError(field_name, f"값이 너무 큽니다 (최대 {maximum:,})", value)

    return None


class MemberValidator:
    """회원 데이터 검증기"""

    def validate(self, member_data: Dict) -> List[ValidationError]:
        errors = []

        err = validate_name(member_data.get("name"))
        if err:
            errors.append(err)

        return errors


class ItemValidator:
    """
    상품 데이터 검증기

    이름, 가격(0 ~ MAX_PRICE), 재고(0 이상) 검증
    """

    def validate(self, item_data: Dict) -> List[ValidationError]:
        errors = []

        err = validate_name(item_data.get("name"))
        if err:
            errors.append(err)

        err = validate_non_negative_int(item_data.get("price"), "price", maximum=MAX_PRICE)
        if err:
            errors.append(err)

        err = validate_non_negative_int(item_data.get("stock_quantity"), "stock_quantity")
        if err:
            errors.append(err)

        return errors


class OrderValidator:
    """주문 요청 검증기"""

    def validate_count(self, count: Any) -> Optional[ValidationError]:
        """주문 수량 (0 허용, 음수 거부)"""
        return validate_non_negative_int(count, "count")


def raise_if_invalid(errors: List[ValidationError]):
    """
    검증 오류가 있으면 첫 번째 오류로 InvalidArgumentError

    나머지 오류는 warning 로그로 남긴다.
    """
    if not errors:
        return

    for extra in errors[1:]:
        logger.warning(f"검증 실패: {extra.field} - {extra.message}")

    first = errors[0]
    raise InvalidArgumentError(f"{first.field}: {first.message}")
