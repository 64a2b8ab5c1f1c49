# backend/huddle/models/user.py
from sqlalchemy import Column, Integer, String

from ..db import Base


class User(Base):
    """
    Users are only referenced by id from participation and invites;
    accounts are created outside this service.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    accessibility = Column(String, nullable=True)  # preferred accommodation tag
