"""
Conference endpoints for API v1.

Creating conferences and listing one's own conferences require an
authenticated caller; the global listing is public.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from conference_central_api.app.core.datastore import Datastore
from conference_central_api.app.core.db import get_datastore
from conference_central_api.app.core.exceptions import InvalidEmailError, UnauthorizedError
from conference_central_api.app.core.security import Identity, get_current_identity
from conference_central_api.app.schemas.conference import ConferenceForm, ConferenceRead
from conference_central_api.app.services.conference_service import ConferenceService

from .profiles import unauthorized


router = APIRouter()


def get_conference_service(datastore: Datastore = Depends(get_datastore)) -> ConferenceService:
    return ConferenceService(datastore)


@router.post("/conference", response_model=ConferenceRead, status_code=status.HTTP_201_CREATED)
def create_conference(
    form: ConferenceForm,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: ConferenceService = Depends(get_conference_service),
) -> ConferenceRead:
    """Create a new conference owned by the caller.

    If the caller has no profile yet, a default one is stored together
    with the conference.
    """
    try:
        return service.create_conference(identity, form)
    except UnauthorizedError as e:
        raise unauthorized(e) from e
    except InvalidEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/queryConferences", response_model=List[ConferenceRead])
def query_conferences(
    service: ConferenceService = Depends(get_conference_service),
) -> List[ConferenceRead]:
    """List all conferences ordered by name."""
    return service.query_conferences()


@router.post("/getConferencesCreated", response_model=List[ConferenceRead])
def get_conferences_created(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: ConferenceService = Depends(get_conference_service),
) -> List[ConferenceRead]:
    """List the conferences created by the caller, ordered by name."""
    try:
        return service.get_conferences_created(identity)
    except UnauthorizedError as e:
        raise unauthorized(e) from e
