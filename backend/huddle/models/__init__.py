# backend/huddle/models/__init__.py

from .event import Event  # noqa: F401
from .league import League, LeagueEvent  # noqa: F401
from .user import User  # noqa: F401
from .participation import Participation, ParticipationType  # noqa: F401
from .invite import Invite, InviteStatus  # noqa: F401
