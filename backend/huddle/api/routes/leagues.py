# backend/huddle/api/routes/leagues.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from sqlalchemy import delete, func, insert, literal, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ...db import get_db
from ...models.event import Event
from ...models.league import League, LeagueEvent
from ...models.participation import Participation, ParticipationType
from ...models.schemas import (
    LeagueMembershipRequest,
    LeagueResponse,
    LinkEventRequest,
    OwnerCheck,
    UserLeagueResponse,
)
from ...utils.uploads import discard_image, save_image
from ..deps import body_of, get_identity, get_listing_user, wants_json

logger = logging.getLogger(__name__)

router = APIRouter(tags=["leagues"])

# which participation type to report when a user has several rows in a league
_TYPE_PRIORITY = {
    ParticipationType.CREATOR: 0,
    ParticipationType.PARTICIPANT: 1,
    ParticipationType.PENDING: 2,
}


@router.post("/league")
async def create_league(
    request: Request,
    name: Optional[str] = Form(None, alias="leagueName"),
    prize: Optional[str] = Form(None),
    event_dates: Optional[str] = Form(None, alias="eventDates"),
    spots: Optional[int] = Form(None),
    organizer: Optional[str] = Form(None),
    sport: Optional[str] = Form(None),
    rules: Optional[str] = Form(None),
    creator_id: Optional[int] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """Creates a league and a pending participation for its creator."""
    image_url = await save_image(image)

    try:
        league = League(
            name=name,
            prize=prize,
            event_dates=event_dates,
            spots=spots,
            organizer=organizer,
            sport=sport,
            rules=rules,
            image_url=image_url or "",
            creator_id=creator_id,
        )
        db.add(league)
        db.flush()
        league_id = league.id

        db.add(
            Participation(
                user_id=creator_id,
                league_id=league_id,
                event_id=None,
                type=ParticipationType.PENDING,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard_image(image_url)
        logger.error("Failed to add league", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add league")

    logger.info(f"League {league_id} added by user {creator_id}")

    if wants_json(request):
        return JSONResponse(
            status_code=201,
            content={"message": "League added successfully!", "leagueId": league_id},
        )
    return RedirectResponse(
        url=f"/pages/add-events.html?leagueId={league_id}",
        status_code=303,
    )


@router.put("/league/{league_id}")
async def update_league(
    league_id: int,
    name: Optional[str] = Form(None, alias="leagueName"),
    prize: Optional[str] = Form(None),
    event_dates: Optional[str] = Form(None, alias="eventDates"),
    spots: Optional[int] = Form(None),
    organizer: Optional[str] = Form(None),
    sport: Optional[str] = Form(None),
    rules: Optional[str] = Form(None),
    creator_id: Optional[int] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    image_url = None
    try:
        league = db.get(League, league_id)
        if not league:
            raise HTTPException(status_code=404, detail="League not found")

        image_url = await save_image(image)

        league.name = name
        league.prize = prize
        league.event_dates = event_dates
        league.spots = spots
        league.organizer = organizer
        league.sport = sport
        league.rules = rules
        if image_url is not None:
            league.image_url = image_url
        if creator_id is not None:
            league.creator_id = creator_id

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        discard_image(image_url)
        logger.error(f"Failed to update league {league_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update league")

    return {"message": "League updated successfully!", "leagueId": league_id}


@router.get("/leagues", response_model=List[LeagueResponse])
def list_leagues(db: Session = Depends(get_db)):
    try:
        return db.scalars(select(League).order_by(League.id)).all()
    except SQLAlchemyError:
        logger.error("Failed to retrieve leagues", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve leagues")


@router.get("/leagues/sport", response_model=List[LeagueResponse])
def leagues_by_sport(
    sport: Optional[str] = None,
    accessibility: Optional[str] = None,
    user_id: int = Depends(get_listing_user),
    db: Session = Depends(get_db),
):
    """
    Leagues of a sport the user has not joined yet.
    With `accessibility`, only leagues having a linked event whose tags
    contain it.
    """
    if sport is None:
        return []

    joined = select(Participation.league_id).where(
        Participation.user_id == user_id,
        Participation.league_id.is_not(None),
        Participation.type == ParticipationType.PARTICIPANT,
    )
    stmt = select(League).where(League.sport == sport, League.id.not_in(joined))
    if accessibility:
        accessible_event = (
            select(LeagueEvent.id)
            .join(Event, LeagueEvent.event_id == Event.id)
            .where(
                LeagueEvent.league_id == League.id,
                func.instr(Event.accessibility, accessibility) > 0,
            )
        )
        stmt = stmt.where(accessible_event.exists())

    try:
        return db.scalars(stmt.order_by(League.id)).all()
    except SQLAlchemyError:
        logger.error("Failed to retrieve leagues by sport", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/leagues/user/{user_id}", response_model=List[UserLeagueResponse])
def leagues_for_user(user_id: int, db: Session = Depends(get_db)):
    """
    Leagues the user has any participation in, one entry per league,
    with the names of the league's events in event order.
    """
    stmt = (
        select(League, Participation.type)
        .join(Participation, Participation.league_id == League.id)
        .where(Participation.user_id == user_id)
        .options(selectinload(League.events))
        .order_by(League.id)
    )
    try:
        rows = db.execute(stmt).all()
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve leagues for user {user_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve leagues")

    by_league: dict[int, tuple[League, ParticipationType]] = {}
    for league, ptype in rows:
        current = by_league.get(league.id)
        if current is None or _TYPE_PRIORITY[ptype] < _TYPE_PRIORITY[current[1]]:
            by_league[league.id] = (league, ptype)

    return [
        UserLeagueResponse(
            **LeagueResponse.model_validate(league).model_dump(),
            type=ptype,
            event_names=[e.name for e in league.events if e.name is not None],
        )
        for league, ptype in by_league.values()
    ]


@router.get("/leagues/created/{user_id}", response_model=List[LeagueResponse])
def leagues_created_by(user_id: int, db: Session = Depends(get_db)):
    stmt = select(League).where(League.creator_id == user_id).order_by(League.id)
    try:
        return db.scalars(stmt).all()
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve leagues created by {user_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve created leagues")


@router.get("/leagues/{league_id}", response_model=LeagueResponse)
def get_league(league_id: int, db: Session = Depends(get_db)):
    try:
        league = db.get(League, league_id)
    except SQLAlchemyError:
        logger.error(f"Failed to retrieve league {league_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")

    if not league:
        raise HTTPException(status_code=404, detail="League not found")
    return league


@router.delete("/league/{league_id}")
def delete_league(
    league_id: int,
    payload: OwnerCheck = Depends(body_of(OwnerCheck)),
    identity: Optional[int] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Deletes a league with its event links and memberships. Creator only."""
    caller_id = identity if identity is not None else payload.user_id

    try:
        league = db.get(League, league_id)
        if not league:
            raise HTTPException(status_code=404, detail="League not found")
        if caller_id is None or league.creator_id != caller_id:
            raise HTTPException(
                status_code=403,
                detail="You do not have permission to delete this league.",
            )

        db.execute(delete(LeagueEvent).where(LeagueEvent.league_id == league_id))
        db.execute(delete(Participation).where(Participation.league_id == league_id))
        result = db.execute(delete(League).where(League.id == league_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Failed to delete league {league_id}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete the league")

    logger.info(f"League {league_id} deleted by user {caller_id}")
    return {"message": "League deleted successfully", "changes": result.rowcount}


@router.post("/link-event-to-league", response_class=PlainTextResponse)
def link_event_to_league(
    payload: LinkEventRequest = Depends(body_of(LinkEventRequest)),
    db: Session = Depends(get_db),
):
    try:
        db.add(LeagueEvent(league_id=payload.league_id, event_id=payload.event_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to link event to league", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to link event to league")

    return "Event linked to league successfully!"


@router.post("/join-league")
def join_league(
    payload: LeagueMembershipRequest = Depends(body_of(LeagueMembershipRequest)),
    db: Session = Depends(get_db),
):
    """
    Adds the user as participant to every event already in the league,
    in a single INSERT ... SELECT.
    """
    # NULL ids never match a row
    if payload.user_id is None or payload.league_id is None:
        return {"message": "Successfully joined the league", "changes": 0}

    linked_events = select(
        literal(payload.user_id),
        LeagueEvent.event_id,
        literal(payload.league_id),
        literal(ParticipationType.PARTICIPANT.value),
    ).where(LeagueEvent.league_id == payload.league_id)
    stmt = insert(Participation.__table__).from_select(
        ["user_id", "event_id", "league_id", "type"],
        linked_events,
    )

    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to join league", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to join league")

    logger.info(
        f"User {payload.user_id} joined league {payload.league_id} "
        f"({result.rowcount} events)"
    )
    return {"message": "Successfully joined the league", "changes": result.rowcount}


@router.post("/exit-league")
def exit_league(
    payload: LeagueMembershipRequest = Depends(body_of(LeagueMembershipRequest)),
    db: Session = Depends(get_db),
):
    if payload.user_id is None or payload.league_id is None:
        return {"message": "Successfully exited the league", "changes": 0}

    stmt = delete(Participation).where(
        Participation.user_id == payload.user_id,
        Participation.league_id == payload.league_id,
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to exit league", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to exit league")

    return {"message": "Successfully exited the league", "changes": result.rowcount}


@router.post("/accept-league")
def accept_league(
    payload: LeagueMembershipRequest = Depends(body_of(LeagueMembershipRequest)),
    db: Session = Depends(get_db),
):
    if payload.user_id is None or payload.league_id is None:
        return {"message": "League participation accepted successfully!", "changes": 0}

    stmt = (
        update(Participation)
        .where(
            Participation.user_id == payload.user_id,
            Participation.league_id == payload.league_id,
        )
        .values(type=ParticipationType.PARTICIPANT)
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to accept league participation", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to accept league participation"
        )

    return {
        "message": "League participation accepted successfully!",
        "changes": result.rowcount,
    }


@router.post("/reject-league")
def reject_league(
    payload: LeagueMembershipRequest = Depends(body_of(LeagueMembershipRequest)),
    db: Session = Depends(get_db),
):
    if payload.user_id is None or payload.league_id is None:
        return {"message": "League participation rejected successfully!", "changes": 0}

    stmt = delete(Participation).where(
        Participation.user_id == payload.user_id,
        Participation.league_id == payload.league_id,
    )
    try:
        result = db.execute(stmt)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("Failed to reject league participation", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to reject league participation"
        )

    return {
        "message": "League participation rejected successfully!",
        "changes": result.rowcount,
    }
