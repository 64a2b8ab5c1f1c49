# backend/huddle/models/league.py

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db import Base
from .event import Event


class League(Base):
    __tablename__ = "leagues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str | None] = mapped_column("leagueName", String)
    prize: Mapped[str | None] = mapped_column(String)
    event_dates: Mapped[str | None] = mapped_column("eventDates", String)
    spots: Mapped[int | None] = mapped_column(Integer)
    organizer: Mapped[str | None] = mapped_column(String)
    sport: Mapped[str | None] = mapped_column(String, index=True)
    rules: Mapped[str | None] = mapped_column(String)
    image_url: Mapped[str | None] = mapped_column("imageUrl", String)
    creator_id: Mapped[int | None] = mapped_column(Integer, index=True)

    # read-only view over league_events, rows are written through LeagueEvent
    events: Mapped[list[Event]] = relationship(
        Event,
        secondary="league_events",
        order_by=Event.id,
        viewonly=True,
    )


class LeagueEvent(Base):
    """Many-to-many link between leagues and events."""
    __tablename__ = "league_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    league_id: Mapped[int | None] = mapped_column(
        ForeignKey("leagues.id"),
        index=True,
    )
    event_id: Mapped[int | None] = mapped_column(
        ForeignKey("events.id"),
        index=True,
    )
