# backend/huddle/api/routes/invites.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...db import get_db
from ...models.invite import Invite, InviteStatus
from ...models.schemas import InviteCreate, InviteStatusUpdate
from ..deps import body_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invite", tags=["invites"])


@router.post("", response_class=PlainTextResponse)
def create_invite(
    payload: InviteCreate = Depends(body_of(InviteCreate)),
    db: Session = Depends(get_db),
):
    try:
        db.add(
            Invite(
                user_id=payload.user_id,
                league_id=payload.league_id,
                status=InviteStatus.PENDING,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to create invite", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create invite")

    return "Invite created successfully!"


@router.put("/{invite_id}", response_class=PlainTextResponse)
def update_invite(
    invite_id: int,
    payload: InviteStatusUpdate = Depends(body_of(InviteStatusUpdate)),
    db: Session = Depends(get_db),
):
    """Sets the invite status (pending, accepted or declined)."""
    try:
        invite = db.get(Invite, invite_id)
        if not invite:
            raise HTTPException(status_code=404, detail="Invite not found")

        invite.status = payload.status
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Failed to update invite {invite_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update invite")

    return "Invite updated successfully!"
