"""Allocation of numeric ids scoped under a parent key."""

from typing import Optional

from ..core.datastore import Datastore, Key


class IdentityAllocator:
    """Hand out ids that are unique among all ids of a kind under a parent.

    Uniqueness, including under concurrent callers, is guaranteed by the
    datastore's ``allocate_id``; this class only fixes the kind.
    """

    def __init__(self, datastore: Datastore, kind: str) -> None:
        self._datastore = datastore
        self.kind = kind

    def allocate(self, parent: Optional[Key]) -> int:
        return self._datastore.allocate_id(parent, self.kind)

    def allocate_key(self, parent: Optional[Key]) -> Key:
        """Allocate an id and return the complete key built from it."""
        return Key(self.kind, self.allocate(parent), parent)
