"""
Pydantic models for API request/response validation.

Responses keep the stored column names (eventName, imageUrl, ...) on the wire.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .invite import InviteStatus
from .participation import ParticipationType


class EventResponse(BaseModel):
    """Event row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = Field(None, serialization_alias="eventName")
    date: Optional[str] = Field(None, serialization_alias="eventDate")
    time: Optional[str] = Field(None, serialization_alias="eventTime")
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None
    spots: Optional[int] = None
    sport: Optional[str] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    accessibility: Optional[str] = None
    creator_id: Optional[int] = None


class UserEventResponse(EventResponse):
    """Event row plus the user's participation type."""

    type: Optional[ParticipationType] = None


class LeagueResponse(BaseModel):
    """League row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = Field(None, serialization_alias="leagueName")
    prize: Optional[str] = None
    event_dates: Optional[str] = Field(None, serialization_alias="eventDates")
    spots: Optional[int] = None
    organizer: Optional[str] = None
    sport: Optional[str] = None
    rules: Optional[str] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    creator_id: Optional[int] = None


class UserLeagueResponse(LeagueResponse):
    """League row with the user's participation type and linked event names."""

    type: Optional[ParticipationType] = None
    event_names: List[str] = Field(default_factory=list, serialization_alias="eventNames")


class RsvpRequest(BaseModel):
    user_id: Optional[int] = None
    event_id: Optional[int] = None
    league_id: Optional[int] = None


class RsvpCancelRequest(BaseModel):
    user_id: Optional[int] = None
    event_id: Optional[int] = None


class LeagueMembershipRequest(BaseModel):
    """Body shared by join/exit/accept/reject league calls."""

    user_id: Optional[int] = None
    league_id: Optional[int] = None


class LinkEventRequest(BaseModel):
    league_id: Optional[int] = None
    event_id: Optional[int] = None


class InviteCreate(BaseModel):
    user_id: Optional[int] = None
    league_id: Optional[int] = None


class InviteStatusUpdate(BaseModel):
    status: InviteStatus


class OwnerCheck(BaseModel):
    """Caller id sent with delete requests."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[int] = Field(None, alias="userId")
