"""User Routes — account creation, profile attributes and account removal.

Invariants:
    - Attribute reads are public (by login); writes and removal need a session
    - Removing an account cascades through relations, inboxes, communities and sessions
    - /me routes are PATCH and DELETE only; every GET under /{login} reaches any login
"""

from fastapi import APIRouter, Depends, status

from jackut.api.dependencies import get_service, get_session_token
from jackut.schemas.account import AttributeResponse, ProfileEdit, UserCreate
from jackut.schemas.social import IdList
from jackut.services.jackut_service import JackutService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, service: JackutService = Depends(get_service)):
    """Register a new account."""
    service.create_user(body.login, body.password, body.name)
    return {"login": body.login}


@router.get("/{login}/attributes/{attribute}", response_model=AttributeResponse)
def get_attribute(
    login: str, attribute: str, service: JackutService = Depends(get_service),
):
    return AttributeResponse(
        login=login, attribute=attribute,
        value=service.get_user_attribute(login, attribute),
    )


@router.patch("/me/profile", status_code=status.HTTP_204_NO_CONTENT)
def edit_profile(
    body: ProfileEdit,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.edit_profile(token, body.attribute, body.value)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.remove_user(token)


@router.get("/{login}/communities", response_model=IdList)
def list_communities(login: str, service: JackutService = Depends(get_service)):
    return IdList(items=service.communities_of(login))


@router.get("/{login}/fans", response_model=IdList)
def list_fans(login: str, service: JackutService = Depends(get_service)):
    """Users that are fans of `login`."""
    return IdList(items=service.list_fans(login))


@router.get("/{login}/idols", response_model=IdList)
def list_idols(login: str, service: JackutService = Depends(get_service)):
    return IdList(items=service.list_idols(login))
