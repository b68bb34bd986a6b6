"""회원 API"""
from typing import List

from fastapi import APIRouter, Depends

from shop.api.deps import get_member_service
from shop.api.schemas import (
    CreateMemberRequest,
    CreateMemberResponse,
    MemberDto,
    MemberResponse,
    MemberV1Request,
    Result,
    UpdateMemberRequest,
    UpdateMemberResponse,
)
from shop.models import Address, Member
from shop.services import MemberService

router = APIRouter(tags=["members"])


def _to_address(schema) -> Address:
    return Address(**schema.model_dump()) if schema else Address()


@router.post("/api/v1/members", response_model=CreateMemberResponse)
def save_member_v1(body: MemberV1Request, member_service: MemberService = Depends(get_member_service)):
    """등록 V1: 엔티티 모양의 요청을 그대로 받음 (이름 검증은 서비스에서)"""
    member = Member(name=body.name, address=_to_address(body.address))
    member_id = member_service.join(member)
    return CreateMemberResponse(id=member_id)


@router.post("/api/v2/members", response_model=CreateMemberResponse)
def save_member_v2(body: CreateMemberRequest, member_service: MemberService = Depends(get_member_service)):
    """등록 V2: 별도 요청 DTO"""
    member = Member(name=body.name, address=_to_address(body.address))
    member_id = member_service.join(member)
    return CreateMemberResponse(id=member_id)


@router.put("/api/v2/members/{member_id}", response_model=UpdateMemberResponse)
def update_member_v2(
    member_id: int,
    body: UpdateMemberRequest,
    member_service: MemberService = Depends(get_member_service),
):
    """수정: 커맨드(update)와 쿼리(find_one)를 분리"""
    member_service.update(member_id, body.name)
    find_member = member_service.find_one(member_id)
    return UpdateMemberResponse(id=member_id, name=find_member.name)


@router.get("/api/v1/members", response_model=List[MemberResponse])
def members_v1(member_service: MemberService = Depends(get_member_service)):
    """조회 V1: 엔티티 필드 전부를 배열로 반환"""
    return [MemberResponse.model_validate(m) for m in member_service.find_members()]


@router.get("/api/v2/members", response_model=Result[List[MemberDto]])
def members_v2(member_service: MemberService = Depends(get_member_service)):
    """조회 V2: 필요한 필드만 DTO로, {count, data}로 감싸서 반환"""
    collect = [MemberDto(name=m.name) for m in member_service.find_members()]
    return Result[List[MemberDto]](count=len(collect), data=collect)
