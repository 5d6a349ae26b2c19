"""Community Routes — create, inspect, join and leave communities."""

from fastapi import APIRouter, Depends, status

from jackut.api.dependencies import get_service, get_session_token
from jackut.schemas.messaging import CommunityCreate, CommunityResponse
from jackut.services.jackut_service import JackutService

router = APIRouter(prefix="/api/v1/communities", tags=["communities"])


def _describe(service: JackutService, name: str) -> CommunityResponse:
    return CommunityResponse(
        name=name,
        owner=service.community_owner(name),
        description=service.community_description(name),
        members=service.community_members(name),
    )


@router.post("", response_model=CommunityResponse, status_code=status.HTTP_201_CREATED)
def create_community(
    body: CommunityCreate,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.create_community(token, body.name, body.description)
    return _describe(service, body.name)


@router.get("/{name}", response_model=CommunityResponse)
def get_community(name: str, service: JackutService = Depends(get_service)):
    return _describe(service, name)


@router.post("/{name}/members", response_model=CommunityResponse)
def join_community(
    name: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.join_community(token, name)
    return _describe(service, name)


@router.delete("/{name}/members/me", status_code=status.HTTP_204_NO_CONTENT)
def leave_community(
    name: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.leave_community(token, name)
