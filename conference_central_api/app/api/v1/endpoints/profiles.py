"""
Profile endpoints for API v1.

Both routes act on the caller's own profile; the caller is resolved
from the bearer token and handed to the service, which rejects
anonymous calls.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from conference_central_api.app.core.datastore import Datastore
from conference_central_api.app.core.db import get_datastore
from conference_central_api.app.core.exceptions import InvalidEmailError, UnauthorizedError
from conference_central_api.app.core.security import Identity, get_current_identity
from conference_central_api.app.schemas.profile import ProfileForm, ProfileRead
from conference_central_api.app.services.profile_service import ProfileService


router = APIRouter()


def get_profile_service(datastore: Datastore = Depends(get_datastore)) -> ProfileService:
    return ProfileService(datastore)


def unauthorized(exc: UnauthorizedError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(exc),
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/profile", response_model=ProfileRead)
def save_profile(
    form: ProfileForm,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileRead:
    """Create or update the caller's profile.

    Fields missing from the form keep their stored value, or get their
    default for a new profile: the local part of the caller's e‑mail as
    display name and ``NOT_SPECIFIED`` as tee shirt size.
    """
    try:
        return service.save_profile(identity, form)
    except UnauthorizedError as e:
        raise unauthorized(e) from e
    except InvalidEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/profile", response_model=Optional[ProfileRead])
def get_profile(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> Optional[ProfileRead]:
    """Return the caller's profile, or ``null`` if they have none yet."""
    try:
        return service.get_profile(identity)
    except UnauthorizedError as e:
        raise unauthorized(e) from e
