"""
Business logic for conferences.

Every conference is stored as a child of its organizer's profile: the
conference key is allocated under the profile key, so the owner is
part of the conference's identity and can never change.  Listing the
conferences a user created is therefore an ancestor query on their
profile key.
"""

import logging
from typing import List, Optional

from ..core.datastore import Datastore, Entity
from ..core.security import Identity, require_identity
from ..schemas.conference import ConferenceForm, ConferenceRead
from .id_allocator import IdentityAllocator
from .profile_service import ProfileService, profile_key

logger = logging.getLogger(__name__)

CONFERENCE_KIND = "Conference"


class ConferenceService:
    """Create conferences and query them globally or per organizer."""

    def __init__(self, datastore: Datastore, profiles: Optional[ProfileService] = None) -> None:
        self._datastore = datastore
        self._profiles = profiles or ProfileService(datastore)
        self._allocator = IdentityAllocator(datastore, CONFERENCE_KIND)

    def create_conference(self, identity: Optional[Identity], form: ConferenceForm) -> ConferenceRead:
        """Create a conference owned by the caller and return it.

        The caller's profile is stored in the same write as the conference,
        which materialises a default profile for callers who never saved one.
        """
        identity = require_identity(identity)
        profile = self._profiles.get_or_default(identity)
        conference_key = self._allocator.allocate_key(profile_key(identity.user_id))

        properties = form.model_dump(mode="json")
        properties["organizer_user_id"] = identity.user_id
        properties["month"] = form.start_date.month if form.start_date else 0
        properties["seats_available"] = form.max_attendees
        conference = Entity(key=conference_key, properties=properties)

        self._datastore.put(conference, self._profiles.to_entity(profile))
        logger.info(
            "User %s created conference %s '%s'",
            identity.user_id,
            conference_key.id,
            form.name,
        )
        return self._to_read(conference)

    def query_conferences(self) -> List[ConferenceRead]:
        """Return all conferences ordered by name."""
        entities = self._datastore.query(CONFERENCE_KIND, order_by="name")
        return [self._to_read(entity) for entity in entities]

    def get_conferences_created(self, identity: Optional[Identity]) -> List[ConferenceRead]:
        """Return the conferences created by the caller, ordered by name."""
        identity = require_identity(identity)
        entities = self._datastore.query(
            CONFERENCE_KIND,
            ancestor=profile_key(identity.user_id),
            order_by="name",
        )
        return [self._to_read(entity) for entity in entities]

    @staticmethod
    def _to_read(entity: Entity) -> ConferenceRead:
        return ConferenceRead(
            id=entity.key.id,
            websafe_key=entity.key.urlsafe(),
            parent_profile_key=entity.key.parent.urlsafe(),
            **entity.properties,
        )
