"""Session Routes — open and close login sessions."""

from fastapi import APIRouter, Depends, status

from jackut.api.dependencies import get_service, get_session_token
from jackut.schemas.account import SessionOpen, SessionResponse
from jackut.services.jackut_service import JackutService

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def open_session(body: SessionOpen, service: JackutService = Depends(get_service)):
    token = service.open_session(body.login, body.password)
    return SessionResponse(token=token, login=body.login)


@router.delete("/current")
def close_session(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return {"closed": service.close_session(token)}
