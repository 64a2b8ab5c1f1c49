# backend/huddle/api/routes/events.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...db import get_db
from ...models.event import Event, accessibility_string
from ...models.league import LeagueEvent
from ...models.participation import Participation, ParticipationType
from ...models.schemas import EventResponse, OwnerCheck, UserEventResponse
from ...utils.uploads import discard_image, save_image
from ..deps import body_of, get_identity, get_listing_user, wants_json

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.post("/event")
async def create_event(
    request: Request,
    name: Optional[str] = Form(None, alias="eventName"),
    date: Optional[str] = Form(None, alias="eventDate"),
    time: Optional[str] = Form(None, alias="eventTime"),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    spots: Optional[int] = Form(None),
    sport: Optional[str] = Form(None),
    creator_id: Optional[int] = Form(None),
    league_id: Optional[int] = Form(None),
    blindness: Optional[str] = Form(None),
    wheelchair: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """Creates an event and, when a league id is posted, links it to that league."""
    image_url = await save_image(image)

    try:
        event = Event(
            name=name,
            date=date,
            time=time,
            address=address,
            city=city,
            state=state,
            description=description,
            spots=spots,
            sport=sport,
            image_url=image_url or "",
            accessibility=accessibility_string(
                {"blindness": blindness, "wheelchair": wheelchair}
            ),
            creator_id=creator_id,
        )
        db.add(event)
        db.flush()
        event_id = event.id

        # event and link are committed together or not at all
        if league_id is not None:
            db.add(LeagueEvent(league_id=league_id, event_id=event_id))

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard_image(image_url)
        logger.error("Failed to add event", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add event")

    if league_id is not None:
        logger.info(f"Event {event_id} added and linked to league {league_id}")
    else:
        logger.info(f"Event {event_id} added")

    if wants_json(request):
        return JSONResponse(
            status_code=201,
            content={
                "message": "Event added successfully!",
                "eventId": event_id,
                "leagueId": league_id,
            },
        )
    if league_id is not None:
        return RedirectResponse(
            url=f"/pages/add-events.html?leagueId={league_id}",
            status_code=303,
        )
    return RedirectResponse(url="/pages/homepage.html", status_code=303)


@router.put("/event/{event_id}")
async def update_event(
    event_id: int,
    name: Optional[str] = Form(None, alias="eventName"),
    date: Optional[str] = Form(None, alias="eventDate"),
    time: Optional[str] = Form(None, alias="eventTime"),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    spots: Optional[int] = Form(None),
    sport: Optional[str] = Form(None),
    creator_id: Optional[int] = Form(None),
    blindness: Optional[str] = Form(None),
    wheelchair: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    Replaces the event's fields with the submitted form.
    The image is only replaced when a new file is uploaded.
    """
    image_url = None
    try:
        event = db.get(Event, event_id)
        if not event:
            raise HTTPException(status_code=404, detail="Event not found")

        image_url = await save_image(image)

        event.name = name
        event.date = date
        event.time = time
        event.address = address
        event.city = city
        event.state = state
        event.description = description
        event.spots = spots
        event.sport = sport
        event.accessibility = accessibility_string(
            {"blindness": blindness, "wheelchair": wheelchair}
        )
        if image_url is not None:
            event.image_url = image_url
        if creator_id is not None:
            event.creator_id = creator_id

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard_image(image_url)
        logger.error(f"Failed to update event {event_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update event")

    return {"message": "Event updated successfully!", "eventId": event_id}


@router.get("/events", response_model=List[EventResponse])
def list_events(db: Session = Depends(get_db)):
    try:
        return db.scalars(select(Event).order_by(Event.id)).all()
    except SQLAlchemyError:
        logger.error("Failed to retrieve events", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve events")


@router.get("/events/sport", response_model=List[EventResponse])
def events_by_sport(
    sport: Optional[str] = None,
    accessibility: Optional[str] = None,
    user_id: int = Depends(get_listing_user),
    db: Session = Depends(get_db),
):
    """
    Events of a sport the user has not RSVP'd to yet.

    `accessibility` is matched as a case-sensitive substring of the stored
    tags, so "wheel" matches "wheelchair".
    """
    # NULL never equals anything
    if sport is None:
        return []

    joined = select(Participation.event_id).where(
        Participation.user_id == user_id,
        Participation.event_id.is_not(None),
        Participation.type == ParticipationType.PARTICIPANT,
    )
    stmt = select(Event).where(Event.sport == sport, Event.id.not_in(joined))
    if accessibility:
        stmt = stmt.where(func.instr(Event.accessibility, accessibility) > 0)

    try:
        return db.scalars(stmt.order_by(Event.id)).all()
    except SQLAlchemyError:
        logger.error("Failed to retrieve events by sport", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/events/league/{league_id}", response_model=List[EventResponse])
def events_for_league(league_id: int, db: Session = Depends(get_db)):
    stmt = (
        select(Event)
        .join(LeagueEvent, LeagueEvent.event_id == Event.id)
        .where(LeagueEvent.league_id == league_id)
        .order_by(Event.id)
    )
    try:
        return db.scalars(stmt).all()
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve events for league {league_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/events/user/{user_id}", response_model=List[UserEventResponse])
def events_for_user(user_id: int, db: Session = Depends(get_db)):
    """Events the user takes part in, with the kind of participation."""
    stmt = (
        select(Event, Participation.type)
        .join(Participation, Participation.event_id == Event.id)
        .where(Participation.user_id == user_id)
        .order_by(Event.id)
    )
    try:
        rows = db.execute(stmt).all()
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve events for user {user_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve events")

    return [
        UserEventResponse(**EventResponse.model_validate(e).model_dump(), type=t)
        for e, t in rows
    ]


@router.get("/events/created/{user_id}", response_model=List[EventResponse])
def events_created_by(user_id: int, db: Session = Depends(get_db)):
    stmt = select(Event).where(Event.creator_id == user_id).order_by(Event.id)
    try:
        return db.scalars(stmt).all()
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve events created by {user_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve events")


@router.get("/events/{event_id}", response_model=EventResponse)
def get_event(event_id: int, db: Session = Depends(get_db)):
    try:
        event = db.get(Event, event_id)
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve event {event_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve event")

    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.delete("/event/{event_id}")
def delete_event(
    event_id: int,
    payload: OwnerCheck = Depends(body_of(OwnerCheck)),
    identity: Optional[int] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Deletes an event together with its league links and RSVPs. Creator only."""
    caller_id = identity if identity is not None else payload.user_id

    try:
        event = db.get(Event, event_id)
        if not event:
            raise HTTPException(status_code=404, detail="Event not found")
        if caller_id is None or event.creator_id != caller_id:
            raise HTTPException(
                status_code=403,
                detail="You do not have permission to delete this event.",
            )

        db.execute(delete(LeagueEvent).where(LeagueEvent.event_id == event_id))
        db.execute(delete(Participation).where(Participation.event_id == event_id))
        result = db.execute(delete(Event).where(Event.id == event_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Failed to delete event {event_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete the event")

    logger.info(f"Event {event_id} deleted by user {caller_id}")
    return {"message": "Event deleted successfully", "affectedRows": result.rowcount}
