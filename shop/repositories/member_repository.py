"""회원 리포지토리"""
from typing import List

from shop.models import Member
from shop.repositories.base import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """회원 조회"""

    model = Member

    def find_by_name(self, name: str) -> List[Member]:
        """이름이 정확히 같은 회원 목록 (동명이인 포함)"""
        return (
            self.db.query(Member)
            .filter(Member.name == name)
            .order_by(Member.id)
            .all()
        )
