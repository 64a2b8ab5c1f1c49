# backend/huddle/models/invite.py

import enum

from sqlalchemy import Enum, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


class InviteStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Invite(Base):
    __tablename__ = "invites"

    invite_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    league_id: Mapped[int | None] = mapped_column(ForeignKey("leagues.id"))
    status: Mapped[InviteStatus] = mapped_column(
        Enum(
            InviteStatus,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=InviteStatus.PENDING,
    )
