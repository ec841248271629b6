"""
Business logic for user profiles.

A profile is keyed by the caller's user id as reported by the
authentication provider.  It is created lazily: either explicitly by
``save_profile`` or implicitly when the caller creates their first
conference (see ``ConferenceService.create_conference``).
"""

import logging
from typing import Optional

from ..core.datastore import Datastore, Entity, Key
from ..core.exceptions import InvalidEmailError
from ..core.security import Identity, require_identity
from ..schemas.profile import ProfileForm, ProfileRead, TeeShirtSize

logger = logging.getLogger(__name__)

PROFILE_KIND = "Profile"


def profile_key(user_id: str) -> Key:
    """Return the datastore key of the profile owned by ``user_id``."""
    return Key(PROFILE_KIND, user_id)


def default_display_name(email: Optional[str]) -> Optional[str]:
    """Get the display name from the user's e‑mail.

    For ``lemoncake@example.com`` the display name becomes ``lemoncake``.
    Without an e‑mail there is no default and ``None`` is returned.
    Raises ``InvalidEmailError`` if the e‑mail has no ``@`` to split on.
    """
    if email is None:
        return None
    if "@" not in email:
        raise InvalidEmailError(f"Cannot derive a display name from e-mail {email!r}")
    return email.split("@", 1)[0]


class ProfileService:
    """Fetch, default‑construct and upsert profiles."""

    def __init__(self, datastore: Datastore) -> None:
        self._datastore = datastore

    def fetch(self, user_id: str) -> Optional[ProfileRead]:
        """Point lookup of the stored profile for ``user_id``."""
        entity = self._datastore.get(profile_key(user_id))
        if entity is None:
            return None
        return ProfileRead(user_id=user_id, **entity.properties)

    def get_or_default(self, identity: Identity) -> ProfileRead:
        """Return the stored profile or a new, unsaved one with default values."""
        profile = self.fetch(identity.user_id)
        if profile is not None:
            return profile
        return ProfileRead(
            user_id=identity.user_id,
            display_name=default_display_name(identity.email),
            main_email=identity.email,
            tee_shirt_size=TeeShirtSize.NOT_SPECIFIED,
        )

    def upsert(self, identity: Identity, form: ProfileForm) -> ProfileRead:
        """Create the caller's profile or update its mutable fields.

        Only ``display_name`` and ``tee_shirt_size`` are ever changed on an
        existing profile, and only when the form carries a value for them.
        """
        profile = self.fetch(identity.user_id)
        if profile is None:
            display_name = form.display_name
            if display_name is None:
                display_name = default_display_name(identity.email)
            profile = ProfileRead(
                user_id=identity.user_id,
                display_name=display_name,
                main_email=identity.email,
                tee_shirt_size=form.tee_shirt_size or TeeShirtSize.NOT_SPECIFIED,
            )
            logger.info("Creating profile for user %s", identity.user_id)
        else:
            updates = {}
            if form.display_name is not None:
                updates["display_name"] = form.display_name
            if form.tee_shirt_size is not None:
                updates["tee_shirt_size"] = form.tee_shirt_size
            profile = profile.model_copy(update=updates)
            logger.info("Updating profile for user %s: %s", identity.user_id, sorted(updates))
        self._datastore.put(self.to_entity(profile))
        return profile

    def save_profile(self, identity: Optional[Identity], form: ProfileForm) -> ProfileRead:
        identity = require_identity(identity)
        return self.upsert(identity, form)

    def get_profile(self, identity: Optional[Identity]) -> Optional[ProfileRead]:
        identity = require_identity(identity)
        return self.fetch(identity.user_id)

    @staticmethod
    def to_entity(profile: ProfileRead) -> Entity:
        properties = profile.model_dump(mode="json", exclude={"user_id"})
        return Entity(key=profile_key(profile.user_id), properties=properties)
