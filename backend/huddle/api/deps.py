# backend/huddle/api/deps.py

import json
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from ..core.config import Settings, get_settings

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_identity(x_user_id: Optional[int] = Header(None)) -> Optional[int]:
    """
    Caller id as verified by the session layer in front of the app.
    Requests that did not pass through it carry no header.
    """
    return x_user_id


def get_listing_user(
    identity: Optional[int] = Depends(get_identity),
    settings: Settings = Depends(get_settings),
) -> int:
    """User whose own participations are hidden from the sport listings."""
    user_id = identity if identity is not None else settings.DEFAULT_USER_ID
    if user_id is None:
        raise HTTPException(status_code=400, detail="User ID is required")
    return user_id


def body_of(model: type[BaseModel]):
    """
    Dependency parsing a JSON or form-encoded body into `model`.

    Fields the client left out (or a missing body) come through as None,
    the same way empty form fields do.
    """

    async def parse_body(request: Request) -> BaseModel:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_TYPES):
            form = await request.form()
            data = {k: v for k, v in form.items() if v != ""}
        else:
            raw = await request.body()
            try:
                data = json.loads(raw) if raw.strip() else {}
            except ValueError as e:
                raise RequestValidationError(
                    [{"type": "json_invalid", "loc": ("body",), "msg": str(e)}]
                )

        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(e.errors())

    return parse_body


def wants_json(request: Request) -> bool:
    """Browser form posts get a redirect, API clients ask for JSON."""
    return "application/json" in request.headers.get("accept", "")
