"""
Pydantic models for conference data.

``ConferenceForm`` carries the fields a caller supplies when creating a
conference.  The fields are passed through to storage as they are; a
conference without a ``name`` is stored but left out of listings, which
are ordered by name.
``ConferenceRead`` adds what the service fills in: the allocated id,
the owner and the keys tying the conference to its owner's profile.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class ConferenceBase(BaseModel):
    name: Optional[str] = Field(None, examples=["PyCon"])
    description: Optional[str] = Field(None, examples=["The Python conference"])
    topics: List[str] = Field(default_factory=list, examples=[["Programming", "Web"]])
    city: Optional[str] = Field(None, examples=["Pittsburgh"])
    start_date: Optional[date] = Field(None, examples=["2026-05-14"])
    end_date: Optional[date] = Field(None, examples=["2026-05-22"])
    max_attendees: int = Field(0, examples=[2500])


class ConferenceForm(ConferenceBase):
    """Schema for creating a conference."""
    pass


class ConferenceRead(ConferenceBase):
    """Schema for reading a conference from the API."""

    id: int
    websafe_key: str
    organizer_user_id: str
    parent_profile_key: str
    month: int = 0
    seats_available: int = 0

    model_config = {
        "from_attributes": True,
    }
