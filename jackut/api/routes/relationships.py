"""Relationship Routes — friends, idols, crushes and enemies of the session user.

Invariants:
    - Every route resolves the caller from X-Session-Token through the service
    - Pending invites live under /invites so every login is addressable
      under /friends/{login}
    - Relation checks report the caller's real login
"""

from fastapi import APIRouter, Depends, status

from jackut.api.dependencies import get_service, get_session_token
from jackut.schemas.social import CrushResult, FriendRequestResult, IdList, RelationCheck
from jackut.services.jackut_service import JackutService

router = APIRouter(prefix="/api/v1", tags=["relationships"])


# --- Friends ---------------------------------------------------------------------

@router.post("/friends/{login}", response_model=FriendRequestResult)
def request_friend(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    """Invite `login`, or accept the invite `login` already sent."""
    formed = service.request_friend(token, login)
    return FriendRequestResult(target=login, friends=formed)


@router.get("/friends", response_model=IdList)
def list_friends(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return IdList(items=service.list_friends(token))


@router.get("/invites", response_model=IdList)
def list_pending_invites(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return IdList(items=service.list_pending_invites(token))


@router.get("/friends/{login}", response_model=RelationCheck)
def is_friend(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    caller = service.login_of_session(token)
    holds = service.is_friend(token, login)
    return RelationCheck(login=caller, target=login, relation="friend", holds=holds)


# --- Idols -----------------------------------------------------------------------

@router.post("/idols/{login}", response_model=RelationCheck, status_code=status.HTTP_201_CREATED)
def add_idol(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    """Become a fan of `login`."""
    service.add_fan(token, login)
    caller = service.login_of_session(token)
    return RelationCheck(login=caller, target=login, relation="idol", holds=True)


@router.get("/fans/{fan}/idols/{idol}", response_model=RelationCheck)
def is_fan(fan: str, idol: str, service: JackutService = Depends(get_service)):
    return RelationCheck(
        login=fan, target=idol, relation="idol", holds=service.is_fan(fan, idol),
    )


# --- Crushes ---------------------------------------------------------------------

@router.post("/crushes/{login}", response_model=CrushResult, status_code=status.HTTP_201_CREATED)
def add_crush(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return CrushResult(target=login, mutual=service.add_crush(token, login))


@router.get("/crushes", response_model=IdList)
def list_crushes(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return IdList(items=service.list_crushes(token))


@router.get("/crushes/{login}", response_model=RelationCheck)
def is_crush(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    holds = service.is_crush(token, login)
    caller = service.login_of_session(token)
    return RelationCheck(login=caller, target=login, relation="crush", holds=holds)


# --- Enemies ---------------------------------------------------------------------

@router.post("/enemies/{login}", response_model=RelationCheck, status_code=status.HTTP_201_CREATED)
def add_enemy(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.add_enemy(token, login)
    caller = service.login_of_session(token)
    return RelationCheck(login=caller, target=login, relation="enemy", holds=True)


@router.get("/enemies", response_model=IdList)
def list_enemies(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return IdList(items=service.list_enemies(token))


@router.get("/enemies/{login}", response_model=RelationCheck)
def is_enemy(
    login: str,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    holds = service.is_enemy(token, login)
    caller = service.login_of_session(token)
    return RelationCheck(login=caller, target=login, relation="enemy", holds=holds)
