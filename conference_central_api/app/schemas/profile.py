"""
Pydantic models for profile data.

``ProfileForm`` is what a caller sends to create or update their own
profile; every field is optional and an absent value means "leave as
is" (or "use the default" for a new profile).  ``ProfileRead`` is the
stored profile as returned by the API.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TeeShirtSize(str, Enum):
    NOT_SPECIFIED = "NOT_SPECIFIED"
    XS_M = "XS_M"
    XS_W = "XS_W"
    S_M = "S_M"
    S_W = "S_W"
    M_M = "M_M"
    M_W = "M_W"
    L_M = "L_M"
    L_W = "L_W"
    XL_M = "XL_M"
    XL_W = "XL_W"
    XXL_M = "XXL_M"
    XXL_W = "XXL_W"
    XXXL_M = "XXXL_M"
    XXXL_W = "XXXL_W"


class ProfileForm(BaseModel):
    """Schema for saving a profile."""

    display_name: Optional[str] = Field(None, examples=["lemoncake"])
    tee_shirt_size: Optional[TeeShirtSize] = Field(None, examples=["M_W"])


class ProfileRead(BaseModel):
    """Schema for reading a profile from the API."""

    user_id: str
    display_name: Optional[str] = None
    main_email: Optional[str] = None
    tee_shirt_size: TeeShirtSize = TeeShirtSize.NOT_SPECIFIED

    model_config = {
        "from_attributes": True,
    }
