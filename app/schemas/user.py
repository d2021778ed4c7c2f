from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CurrentUser(BaseModel):
    user_id: int


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    locale: str
    timezone: Optional[str] = None
    email_verified: bool
    is_admin: bool
