"""Message Routes — send and destructively read direct and community messages.

Invariants:
    - Reads are POST: each call consumes the oldest message of its kind
"""

from fastapi import APIRouter, Depends, status

from jackut.api.dependencies import get_service, get_session_token
from jackut.schemas.messaging import (
    CommunityMessageCreate,
    DeliveryResult,
    DirectMessageCreate,
    MessageRead,
)
from jackut.services.jackut_service import JackutService

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.post("/direct", status_code=status.HTTP_201_CREATED)
def send_direct(
    body: DirectMessageCreate,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    service.send_direct(token, body.recipient, body.content)
    return {"recipient": body.recipient}


@router.post("/direct/read", response_model=MessageRead)
def read_direct(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return MessageRead(message=service.read_direct(token))


@router.post(
    "/community", response_model=DeliveryResult, status_code=status.HTTP_201_CREATED,
)
def send_community(
    body: CommunityMessageCreate,
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    delivered = service.send_community(token, body.community, body.content)
    return DeliveryResult(community=body.community, delivered=delivered)


@router.post("/community/read", response_model=MessageRead)
def read_community(
    token: str = Depends(get_session_token),
    service: JackutService = Depends(get_service),
):
    return MessageRead(message=service.read_community(token))
