"""회원 서비스"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from shop.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from shop.models import Member
from shop.repositories.member_repository import MemberRepository
from shop.services.transaction_manager import transactional
from shop.utils.validators import MemberValidator, raise_if_invalid

logger = logging.getLogger(__name__)


class MemberService:
    """회원 가입 / 조회 / 수정"""

    def __init__(self, db: Session):
        self.db = db
        self.member_repository = MemberRepository(db)
        self.validator = MemberValidator()

    @transactional
    def join(self, member: Member) -> int:
        """
        회원 가입

        Returns:
            회원 id

        Raises:
            InvalidArgumentError: 회원 정보 없음, 이름 없음/공백
            ConflictError: 같은 이름의 회원이 이미 있음
        """
        if member is None:
            raise InvalidArgumentError("회원 정보가 없습니다")

        raise_if_invalid(self.validator.validate({"name": member.name}))
        self._validate_duplicate_member(member.name)

        self.member_repository.save(member)
        logger.info(f"회원 가입: id={member.id}, name={member.name}")
        return member.id

    def _validate_duplicate_member(self, name: str):
        """중복 회원 검증 (이름 기준)"""
        if self.member_repository.find_by_name(name):
            raise ConflictError(f"이미 존재하는 회원입니다: {name}")

    def find_members(self) -> List[Member]:
        """전체 회원 조회"""
        return self.member_repository.find_all()

    def find_one(self, member_id: int) -> Optional[Member]:
        """회원 단건 조회 (없으면 None)"""
        if member_id is None:
            raise InvalidArgumentError("회원 id가 없습니다")
        return self.member_repository.find_one(member_id)

    def find_by_name(self, name: str) -> List[Member]:
        return self.member_repository.find_by_name(name)

    @transactional
    def update(self, member_id: int, name: str) -> Member:
        """
        회원 이름 수정 (변경 감지로 반영)

        Raises:
            NotFoundError: 회원 없음
            InvalidArgumentError: 이름 없음/공백
            ConflictError: 다른 회원이 이미 쓰는 이름
        """
        raise_if_invalid(self.validator.validate({"name": name}))

        member = self.find_one(member_id)
        if member is None:
            raise NotFoundError(f"회원을 찾을 수 없습니다: {member_id}")

        if member.name != name:
            self._validate_duplicate_member(name)
            member.name = name
        return member
