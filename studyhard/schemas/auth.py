"""
Pydantic schemas for session issuance.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class SessionIdentity(BaseModel):
    """Identity claims supplied by the client at login; extra profile fields are kept."""

    model_config = ConfigDict(extra="allow")

    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
