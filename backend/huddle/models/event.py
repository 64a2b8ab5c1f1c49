# backend/huddle/models/event.py

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base

# Checkbox names on the event form, stored comma-joined in this order
ACCESSIBILITY_TAGS = ("blindness", "wheelchair")


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str | None] = mapped_column("eventName", String)
    # date/time are kept as the text the form submitted
    date: Mapped[str | None] = mapped_column("eventDate", String)
    time: Mapped[str | None] = mapped_column("eventTime", String)
    address: Mapped[str | None] = mapped_column(String)
    city: Mapped[str | None] = mapped_column(String)
    state: Mapped[str | None] = mapped_column(String)
    description: Mapped[str | None] = mapped_column(String)
    spots: Mapped[int | None] = mapped_column(Integer)
    sport: Mapped[str | None] = mapped_column(String, index=True)
    image_url: Mapped[str | None] = mapped_column("imageUrl", String)
    accessibility: Mapped[str | None] = mapped_column(String)
    creator_id: Mapped[int | None] = mapped_column(Integer, index=True)


def accessibility_string(flags: dict) -> str:
    """
    Joins the checked accessibility tags:
      {"blindness": "on", "wheelchair": None} → "blindness"
      {"blindness": "on", "wheelchair": "on"} → "blindness,wheelchair"
    """
    return ",".join(tag for tag in ACCESSIBILITY_TAGS if flags.get(tag))
