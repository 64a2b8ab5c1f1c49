# backend/huddle/api/routes/rsvp.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...db import get_db
from ...models.participation import Participation, ParticipationType
from ...models.schemas import RsvpCancelRequest, RsvpRequest
from ..deps import body_of

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rsvp", tags=["rsvp"])


@router.post("")
def rsvp(
    payload: RsvpRequest = Depends(body_of(RsvpRequest)),
    db: Session = Depends(get_db),
):
    """Registers the user as participant of an event (and its league, if given)."""
    participation = Participation(
        user_id=payload.user_id,
        event_id=payload.event_id,
        league_id=payload.league_id,
        type=ParticipationType.PARTICIPANT,
    )
    try:
        db.add(participation)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to RSVP to event", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to RSVP to event")

    return {"message": "RSVP successful!", "participationId": participation.id}


@router.delete("")
def cancel_rsvp(
    payload: RsvpCancelRequest = Depends(body_of(RsvpCancelRequest)),
    db: Session = Depends(get_db),
):
    """
    Removes every participation of the user in the event.
    Cancelling an RSVP that does not exist reports zero affected rows.
    """
    # NULL ids never match a row
    if payload.user_id is None or payload.event_id is None:
        return {"message": "RSVP cancelled successfully!", "affectedRows": 0}

    stmt = delete(Participation).where(
        Participation.user_id == payload.user_id,
        Participation.event_id == payload.event_id,
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to cancel RSVP", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to cancel RSVP")

    return {"message": "RSVP cancelled successfully!", "affectedRows": result.rowcount}
