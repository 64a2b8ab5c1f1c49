# backend/huddle/models/participation.py

import enum

from sqlalchemy import Enum, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


class ParticipationType(str, enum.Enum):
    CREATOR = "creator"
    PENDING = "pending"
    PARTICIPANT = "participant"


class Participation(Base):
    """
    A user's relationship to an event, a league, or an event inside a league.
    """
    __tablename__ = "participation"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"),
        index=True,
    )
    league_id: Mapped[int | None] = mapped_column(ForeignKey("leagues.id"))
    event_id: Mapped[int | None] = mapped_column(ForeignKey("events.id"))
    # stored as the enum value ("participant"), raw SQL filters rely on it
    type: Mapped[ParticipationType] = mapped_column(
        Enum(
            ParticipationType,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
